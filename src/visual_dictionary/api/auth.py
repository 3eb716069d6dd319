"""Sign-in, sign-up and sign-out endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from visual_dictionary.api.models import Credentials  # noqa: TC001
from visual_dictionary.api.pages import AUTH_PAGE_HTML
from visual_dictionary.api.session import access_token_from
from visual_dictionary.services.auth import AuthenticationError

if TYPE_CHECKING:
    from visual_dictionary.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_class=HTMLResponse)
async def auth_page() -> HTMLResponse:
    """Sign-in page."""
    return HTMLResponse(AUTH_PAGE_HTML)


@router.post("/sign-in")
async def sign_in(credentials: Credentials, request: Request) -> Response:
    """Sign in and store the access token in a cookie."""
    container: AppContainer = request.app.state.container
    try:
        session = container.auth_service.sign_in(
            credentials.email, credentials.password
        )
    except AuthenticationError as exc:
        return JSONResponse(
            {"error": str(exc)}, status_code=status.HTTP_401_UNAUTHORIZED
        )
    response = JSONResponse({"user": {"id": session.user_id, "email": session.email}})
    _set_session_cookie(response, container, session.access_token)
    return response


@router.post("/sign-up")
async def sign_up(credentials: Credentials, request: Request) -> Response:
    """Register a user, signing them in when no confirmation is required."""
    container: AppContainer = request.app.state.container
    try:
        session = container.auth_service.sign_up(
            credentials.email, credentials.password
        )
    except AuthenticationError as exc:
        return JSONResponse(
            {"error": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST
        )
    if session is None:
        return JSONResponse(
            {"user": None, "message": "Check your email to confirm your account."},
            status_code=status.HTTP_202_ACCEPTED,
        )
    response = JSONResponse({"user": {"id": session.user_id, "email": session.email}})
    _set_session_cookie(response, container, session.access_token)
    return response


@router.post("/sign-out")
async def sign_out(request: Request) -> Response:
    """Revoke the session, clear the cookie and go back to the sign-in page."""
    container: AppContainer = request.app.state.container
    container.auth_service.sign_out(access_token_from(request))
    response = RedirectResponse("/auth", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(container.settings.session_cookie_name, path="/")
    return response


def _set_session_cookie(
    response: Response, container: AppContainer, access_token: str
) -> None:
    response.set_cookie(
        container.settings.session_cookie_name,
        access_token,
        httponly=True,
        samesite="lax",
        secure=container.settings.session_cookie_secure,
        path="/",
    )
