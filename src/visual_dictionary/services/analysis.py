"""Image analysis pipeline: upload, vision model call, parsing and persistence."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Protocol
from uuid import uuid4

from pydantic import ValidationError

from visual_dictionary.domain.analysis import AnalysisOutcome, AnalysisRecord
from visual_dictionary.domain.words import WordAnalysis
from visual_dictionary.services.dictionary import WordRepository

ANALYSIS_INSTRUCTIONS = (
    "You are a visual dictionary assistant for English learners. "
    "Analyze the image and identify 3-4 key words or concepts. "
    "For each word, provide its definition using simple, basic English. "
    "Also, provide a sample sentence using very common scenarios and simple "
    "vocabulary. Format your response as a JSON array of objects, each "
    "containing 'word', 'definition', and 'sampleSentence' fields."
)
ANALYSIS_PROMPT = (
    "Analyze this image and provide word definitions and sample sentences."
)

ACCEPTED_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "gif", "webp"})
FALLBACK_WORD = "Analysis unavailable"

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```", re.IGNORECASE)
_RECORD_KEYS = ("analysis", "words", "items")
_EXCERPT_LENGTH = 200

_logger = logging.getLogger(__name__)


class InvalidAnalysisRequest(Exception):
    """Raised when an analysis request is missing its image."""


class ImageUploadError(Exception):
    """Raised when an image cannot be stored."""


class AnalysisParseError(ValueError):
    """Raised when model output does not contain analysis records."""


class VisionClient(Protocol):
    """Interface for the vision-language model."""

    async def describe(
        self,
        *,
        model: str,
        image_url: str,
        instructions: str,
        prompt: str,
        max_output_tokens: int,
    ) -> str:
        """Return the model's free-text answer for the image."""


class ImageStorage(Protocol):
    """Interface for the object storage bucket holding uploads."""

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Store content under path."""

    def public_url(self, path: str) -> str:
        """Return the public URL for a stored path."""


class ImageAnalysisRepository(Protocol):
    """Persistence interface for the per-upload analysis log."""

    def record_analysis(
        self, image_path: str, analysis_data: list[dict[str, object]]
    ) -> None:
        """Store the parsed model output for an image."""


@dataclass
class AnalysisService:
    """Runs uploaded images through the vision model and saves the words."""

    vision_client: VisionClient
    storage: ImageStorage
    word_repository: WordRepository
    image_analysis_repository: ImageAnalysisRepository
    model: str
    max_output_tokens: int = 1000

    async def analyze_upload(
        self, filename: str, content: bytes, content_type: str | None
    ) -> AnalysisOutcome:
        """Store an uploaded image and analyze it via its public URL."""
        extension = _image_extension(filename, content_type)
        if not content:
            raise InvalidAnalysisRequest("Uploaded file is empty")
        path = f"{uuid4()}.{extension}"
        try:
            self.storage.upload(path, content, content_type or f"image/{extension}")
        except Exception as exc:
            raise ImageUploadError("Failed to upload image") from exc
        image_url = self.storage.public_url(path)
        _logger.info("Image uploaded", extra={"path": path})
        return await self.analyze_image_url(image_url)

    async def analyze_image_url(self, image_url: str | None) -> AnalysisOutcome:
        """Ask the vision model about an image and persist the words it finds."""
        if not image_url or not image_url.strip():
            raise InvalidAnalysisRequest("No image URL provided")
        _logger.info("Processing image URL: %s", image_url)
        raw = await self.vision_client.describe(
            model=self.model,
            image_url=image_url,
            instructions=ANALYSIS_INSTRUCTIONS,
            prompt=ANALYSIS_PROMPT,
            max_output_tokens=self.max_output_tokens,
        )
        try:
            records = parse_analysis_text(raw)
        except AnalysisParseError:
            _logger.warning("Failed to parse model response", exc_info=True)
            return AnalysisOutcome(
                image_url=image_url,
                records=[fallback_record(raw)],
                saved=[],
                failed_inserts=0,
                fallback=True,
            )

        analysis_data = [record.to_wire() for record in records]
        try:
            self.image_analysis_repository.record_analysis(image_url, analysis_data)
        except Exception:
            _logger.exception(
                "Failed to save analysis log", extra={"image_url": image_url}
            )

        saved: list[WordAnalysis] = []
        failed = 0
        for record in records:
            try:
                saved.append(self.word_repository.insert_word(record))
            except Exception:
                failed += 1
                _logger.exception("Failed to save word", extra={"word": record.word})
        return AnalysisOutcome(
            image_url=image_url,
            records=records,
            saved=saved,
            failed_inserts=failed,
            fallback=False,
        )


def parse_analysis_text(raw: str) -> list[AnalysisRecord]:
    """Parse model output into records, tolerating markdown code fences."""
    cleaned = _CODE_FENCE.sub("", raw or "").strip()
    try:
        payload = json.loads(cleaned)
    except ValueError as exc:
        raise AnalysisParseError("Model output is not JSON") from exc
    if isinstance(payload, dict):
        payload = next(
            (payload[key] for key in _RECORD_KEYS if isinstance(payload.get(key), list)),
            None,
        )
    if not isinstance(payload, list):
        raise AnalysisParseError("Model output is not a list of words")
    if not payload:
        raise AnalysisParseError("Model output contains no words")
    try:
        return [AnalysisRecord.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise AnalysisParseError("Model output has malformed entries") from exc


def fallback_record(raw: str | None) -> AnalysisRecord:
    """Build the placeholder shown when model output cannot be parsed."""
    excerpt = " ".join((raw or "").split())[:_EXCERPT_LENGTH]
    return AnalysisRecord(
        word=FALLBACK_WORD,
        definition=(
            "The picture could not be turned into dictionary words. "
            "Please try another photo."
        ),
        sample_sentence=excerpt,
    )


def _image_extension(filename: str, content_type: str | None) -> str:
    """Return the storage extension for an accepted image upload."""
    extension = PurePath(filename or "").suffix.lstrip(".").lower()
    if extension in ACCEPTED_EXTENSIONS:
        return extension
    if content_type and content_type.startswith("image/"):
        subtype = content_type.split("/", 1)[1].lower()
        if subtype in ACCEPTED_EXTENSIONS:
            return subtype
    raise InvalidAnalysisRequest(
        "Unsupported file type. Supports: JPG, PNG, GIF, WEBP"
    )
