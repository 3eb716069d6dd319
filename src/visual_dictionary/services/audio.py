"""Text-to-speech service with a per-text in-flight guard."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from visual_dictionary.domain.audio import SynthesizedAudio

_logger = logging.getLogger(__name__)


class InvalidAudioRequest(Exception):
    """Raised when no text is supplied for synthesis."""


class SpeechClient(Protocol):
    """Interface for the text-to-speech model."""

    async def synthesize(
        self, *, model: str, voice: str, text: str, response_format: str
    ) -> bytes:
        """Return encoded audio for text."""


@dataclass
class AudioService:
    """Generates spoken audio for words.

    A request for text that is already being synthesized waits on the pending
    call instead of issuing another one. Response formats are tried in order
    until one yields audio.
    """

    client: SpeechClient
    model: str
    voice: str
    formats: tuple[str, ...] = ("mp3",)
    _pending: dict[str, "asyncio.Task[SynthesizedAudio]"] = field(
        default_factory=dict, init=False, repr=False
    )

    async def synthesize(self, text: str | None) -> SynthesizedAudio:
        """Return audio for text, sharing any in-flight request for it."""
        normalized = (text or "").strip()
        if not normalized:
            raise InvalidAudioRequest("No text provided")
        key = normalized.casefold()
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._generate(normalized))
            self._pending[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        else:
            _logger.info("Audio already in progress for %r", normalized)
        return await asyncio.shield(task)

    def in_progress(self, text: str) -> bool:
        """Return true while audio for text is being generated."""
        return text.strip().casefold() in self._pending

    def _release(self, key: str, task: "asyncio.Task[SynthesizedAudio]") -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
        # Mark the outcome as retrieved when every waiter was cancelled.
        if not task.cancelled():
            task.exception()

    async def _generate(self, text: str) -> SynthesizedAudio:
        _logger.info("Generating audio for text: %s", text)
        last_error: Exception | None = None
        for response_format in self.formats:
            try:
                content = await self.client.synthesize(
                    model=self.model,
                    voice=self.voice,
                    text=text,
                    response_format=response_format,
                )
            except Exception as exc:
                last_error = exc
                _logger.warning(
                    "Audio generation failed for format %s: %s", response_format, exc
                )
                continue
            if content:
                _logger.info(
                    "Audio generated: %s bytes (%s)", len(content), response_format
                )
                return SynthesizedAudio(content=content, format=response_format)
            last_error = RuntimeError(f"Empty {response_format} audio received")
            _logger.warning("Empty audio received for format %s", response_format)
        raise last_error or RuntimeError("No audio formats configured")
