"""Domain models for synthesized speech."""

from dataclasses import dataclass

MEDIA_TYPES: dict[str, str] = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "opus": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "pcm": "audio/pcm",
}


@dataclass(frozen=True)
class SynthesizedAudio:
    """Encoded audio for a piece of text."""

    content: bytes
    format: str

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES.get(self.format, "application/octet-stream")
