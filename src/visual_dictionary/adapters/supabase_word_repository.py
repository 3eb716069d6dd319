"""Supabase-backed repository for saved words."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from visual_dictionary.domain.analysis import AnalysisRecord
from visual_dictionary.domain.words import WordAnalysis
from visual_dictionary.services.dictionary import WordRepository


@dataclass
class SupabaseWordRepository(WordRepository):
    """Supabase implementation of the word_analyses table."""

    client: Client

    def insert_word(self, record: AnalysisRecord) -> WordAnalysis:
        """Insert a word row and return it."""
        response = (
            self.client.table("word_analyses")
            .insert(
                {
                    "word": record.word,
                    "definition": record.definition,
                    "sample_sentence": record.sample_sentence,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save word analysis")
        return _parse_word(response.data[0])

    def list_words(self) -> list[WordAnalysis]:
        """Return all words, newest first."""
        response = (
            self.client.table("word_analyses")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_word(row) for row in response.data or []]


def _parse_word(row: dict[str, object]) -> WordAnalysis:
    """Parse a word_analyses row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return WordAnalysis(
        id=UUID(str(row["id"])),
        word=str(row.get("word", "")),
        definition=str(row.get("definition") or ""),
        sample_sentence=str(row.get("sample_sentence") or ""),
        created_at=created_at,
    )
