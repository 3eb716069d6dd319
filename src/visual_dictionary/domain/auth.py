"""Domain models for authentication sessions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    """Authenticated session issued by the identity provider."""

    access_token: str
    user_id: str
    email: str | None
    refresh_token: str | None = None
