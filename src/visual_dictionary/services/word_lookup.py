"""Word detail lookups against the public dictionary API."""

import logging
from dataclasses import dataclass

import httpx

from visual_dictionary.adapters.dictionary_api_client import DictionaryApiClient
from visual_dictionary.domain.lookup import Definition, Meaning, Phonetic, WordDetail
from visual_dictionary.services.cache import Cache

_logger = logging.getLogger(__name__)


class WordLookupError(Exception):
    """Lookup failure carrying the upstream error fields."""

    def __init__(
        self,
        message: str,
        title: str = "Lookup Failed",
        resolution: str = "",
        status_code: int = 404,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.title = title
        self.resolution = resolution
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "WordLookupError":
        """Build an error from a non-2xx dictionary API response."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            message=str(body.get("message") or "Failed to fetch word details"),
            title=str(body.get("title") or "Lookup Failed"),
            resolution=str(body.get("resolution") or ""),
            status_code=404 if response.status_code == 404 else 502,
        )

    def to_payload(self) -> dict[str, str]:
        return {
            "error": self.message,
            "title": self.title,
            "resolution": self.resolution,
        }


@dataclass
class WordLookupService:
    """Fetches and aggregates dictionary entries with caching."""

    client: DictionaryApiClient
    cache: Cache
    ttl_seconds: int = 3600

    async def lookup(self, word: str) -> WordDetail:
        """Return the detail view for word or raise WordLookupError."""
        cleaned = word.strip()
        if not cleaned:
            raise WordLookupError("No word provided", title="Invalid Word")
        cache_key = f"dictionary:entries:{cleaned.casefold()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, WordDetail):
            return cached

        try:
            entries = await self.client.get_entries(cleaned)
        except httpx.HTTPStatusError as exc:
            error = WordLookupError.from_response(exc.response)
            _logger.warning(
                "Dictionary lookup failed for %s: %s", cleaned, error.message
            )
            raise error from exc
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("Dictionary API unavailable for %s: %s", cleaned, exc)
            raise WordLookupError(
                "Failed to fetch word details",
                title="Dictionary Unavailable",
                resolution="Please try again later.",
                status_code=502,
            ) from exc
        if not isinstance(entries, list) or not entries:
            raise WordLookupError(
                "No definitions found for this word", title="No Definitions Found"
            )
        detail = _build_detail(entries[0])
        self.cache.set(cache_key, detail, ttl_seconds=self.ttl_seconds)
        return detail


def _build_detail(entry: dict[str, object]) -> WordDetail:
    meanings = [_parse_meaning(raw) for raw in entry.get("meanings") or []]
    synonyms: list[str] = []
    antonyms: list[str] = []
    for meaning in meanings:
        synonyms.extend(meaning.synonyms)
        antonyms.extend(meaning.antonyms)
        for definition in meaning.definitions:
            synonyms.extend(definition.synonyms)
            antonyms.extend(definition.antonyms)
    return WordDetail(
        word=str(entry.get("word", "")),
        phonetics=[
            Phonetic(text=raw.get("text") or None, audio=raw.get("audio") or None)
            for raw in entry.get("phonetics") or []
        ],
        meanings=meanings,
        synonyms=_unique(synonyms),
        antonyms=_unique(antonyms),
        source_urls=list(entry.get("sourceUrls") or []),
    )


def _parse_meaning(raw: dict[str, object]) -> Meaning:
    return Meaning(
        part_of_speech=str(raw.get("partOfSpeech", "")),
        definitions=[
            Definition(
                definition=str(item.get("definition", "")),
                example=item.get("example"),
                synonyms=list(item.get("synonyms") or []),
                antonyms=list(item.get("antonyms") or []),
            )
            for item in raw.get("definitions") or []
        ],
        synonyms=list(raw.get("synonyms") or []),
        antonyms=list(raw.get("antonyms") or []),
    )


def _unique(values: list[str]) -> list[str]:
    """Drop duplicates while keeping first-seen order."""
    return list(dict.fromkeys(values))
