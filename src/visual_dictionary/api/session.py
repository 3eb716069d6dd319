"""Session resolution shared by pages and API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, status

from visual_dictionary.domain.auth import AuthSession  # noqa: TC001

if TYPE_CHECKING:
    from visual_dictionary.containers import AppContainer


def access_token_from(request: Request) -> str | None:
    """Return the access token from the Authorization header or the cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    container: AppContainer = request.app.state.container
    return request.cookies.get(container.settings.session_cookie_name)


def current_session(request: Request) -> AuthSession | None:
    """Resolve the caller's session, if any."""
    container: AppContainer = request.app.state.container
    return container.auth_service.get_session(access_token_from(request))


async def require_session(
    session: AuthSession | None = Depends(current_session),
) -> AuthSession:
    """Reject API calls without a valid session."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    return session
