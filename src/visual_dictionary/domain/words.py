"""Domain models for saved dictionary words."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WordAnalysis:
    """A vocabulary word saved from an image analysis."""

    id: UUID
    word: str
    definition: str
    sample_sentence: str
    created_at: datetime | None
