"""Free Dictionary API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx


class DictionaryApiClient(Protocol):
    """Interface for the public dictionary lookup API."""

    async def get_entries(self, word: str) -> list[dict[str, object]]:
        """Return raw dictionary entries for an English word."""


@dataclass
class HttpxDictionaryApiClient(DictionaryApiClient):
    """HTTPX-backed dictionary API client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxDictionaryApiClient":
        """Create a dictionary client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def get_entries(self, word: str) -> list[dict[str, object]]:
        """Fetch entries for a word; non-2xx responses raise HTTPStatusError."""
        url = f"{self.base_url}/entries/en/{quote(word, safe='')}"
        response = await self.http_client.get(url, timeout=10)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
