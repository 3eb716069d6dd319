"""Supabase Auth identity provider."""

import logging
from dataclasses import dataclass

import httpx
from supabase import AuthError, Client

from visual_dictionary.domain.auth import AuthSession
from visual_dictionary.services.auth import AuthProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Identity provider backed by Supabase Auth.

    ``client`` is created with the anon key and only used for user-facing auth
    flows; ``admin_client`` holds the service key for session revocation.
    """

    client: Client
    admin_client: Client

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if response.session is None:
            raise RuntimeError("Supabase returned no session")
        return _to_session(response.session)

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Register a new user."""
        response = self.client.auth.sign_up({"email": email, "password": password})
        if response.session is None:
            return None
        return _to_session(response.session)

    def get_session(self, access_token: str) -> AuthSession | None:
        """Validate an access token with Supabase."""
        try:
            response = self.admin_client.auth.get_user(access_token)
        except AuthError:
            return None
        except httpx.HTTPError as exc:
            _logger.warning("Session lookup failed: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return AuthSession(
            access_token=access_token,
            user_id=str(response.user.id),
            email=response.user.email,
        )

    def sign_out(self, access_token: str) -> None:
        """Revoke all refresh tokens behind an access token."""
        self.admin_client.auth.admin.sign_out(access_token)


def _to_session(session) -> AuthSession:  # type: ignore[no-untyped-def]
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user_id=str(session.user.id),
        email=session.user.email,
    )
