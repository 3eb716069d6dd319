"""Authentication service wrapping the identity provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

from visual_dictionary.domain.auth import AuthSession

_logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when credentials are rejected."""


class AuthProvider(Protocol):
    """Interface for the external identity provider."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Register a user; returns None when email confirmation is pending."""

    def get_session(self, access_token: str) -> AuthSession | None:
        """Return the session for a token, or None when it is not valid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind a token."""


@dataclass
class AuthService:
    """Application service for sign-in state transitions."""

    provider: AuthProvider

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign a user in with email and password."""
        try:
            return self.provider.sign_in(email, password)
        except Exception as exc:
            _logger.warning("Sign-in failed for %s: %s", email, exc)
            raise AuthenticationError("Invalid email or password") from exc

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Register a user with email and password."""
        try:
            return self.provider.sign_up(email, password)
        except Exception as exc:
            _logger.warning("Sign-up failed for %s: %s", email, exc)
            raise AuthenticationError(str(exc) or "Sign-up failed") from exc

    def get_session(self, access_token: str | None) -> AuthSession | None:
        """Resolve a token to a session."""
        if not access_token:
            return None
        return self.provider.get_session(access_token)

    def sign_out(self, access_token: str | None) -> None:
        """Revoke a session; provider failures are logged, not raised."""
        if not access_token:
            return
        try:
            self.provider.sign_out(access_token)
        except Exception:
            _logger.exception("Failed to revoke session")
