"""Domain models for dictionary API lookups."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Phonetic:
    """Pronunciation entry."""

    text: str | None
    audio: str | None


@dataclass(frozen=True)
class Definition:
    """One sense of a word."""

    definition: str
    example: str | None = None
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Meaning:
    """Definitions grouped by part of speech."""

    part_of_speech: str
    definitions: list[Definition]
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WordDetail:
    """Aggregated dictionary entry for the word detail page."""

    word: str
    phonetics: list[Phonetic]
    meanings: list[Meaning]
    synonyms: list[str]
    antonyms: list[str]
    source_urls: list[str]
