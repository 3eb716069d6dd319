"""Listing and searching the user's saved words."""

from dataclasses import dataclass
from typing import Literal, Protocol

from visual_dictionary.domain.analysis import AnalysisRecord
from visual_dictionary.domain.words import WordAnalysis

SortOrder = Literal["asc", "desc"]


class WordRepository(Protocol):
    """Persistence interface for saved words."""

    def insert_word(self, record: AnalysisRecord) -> WordAnalysis:
        """Insert one analysis record and return the stored row."""

    def list_words(self) -> list[WordAnalysis]:
        """Return every saved word, newest first."""


@dataclass
class DictionaryService:
    """Application service for the dictionary listing page."""

    repository: WordRepository

    def list_words(
        self, query: str | None = None, sort: SortOrder | None = None
    ) -> list[WordAnalysis]:
        """Return saved words filtered by query and optionally sorted by word.

        Filtering is a case-insensitive substring match on the word or its
        definition. Without a sort order rows keep the newest-first order of
        the repository.
        """
        words = self.repository.list_words()
        needle = (query or "").strip().casefold()
        if needle:
            words = [
                entry
                for entry in words
                if needle in entry.word.casefold()
                or needle in entry.definition.casefold()
            ]
        if sort is None:
            return words
        return sorted(
            words,
            key=lambda entry: (entry.word.casefold(), entry.word),
            reverse=sort == "desc",
        )
