"""Edge-function style endpoints for image analysis and speech."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from visual_dictionary.api.models import (  # noqa: TC001
    AnalyzeImageRequest,
    GenerateAudioRequest,
)
from visual_dictionary.api.session import require_session
from visual_dictionary.services.analysis import InvalidAnalysisRequest
from visual_dictionary.services.audio import InvalidAudioRequest

if TYPE_CHECKING:
    from visual_dictionary.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/functions/v1",
    tags=["functions"],
    dependencies=[Depends(require_session)],
)


@router.post("/analyze-image")
async def analyze_image(
    request: Request, body: AnalyzeImageRequest | None = None
) -> Response:
    """Analyze an image by public URL and return the extracted words."""
    container: AppContainer = request.app.state.container
    try:
        outcome = await container.analysis_service.analyze_image_url(
            body.image if body else None
        )
    except InvalidAnalysisRequest as exc:
        _logger.error("Rejected analysis request: %s", exc)
        return JSONResponse(
            {"error": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST
        )
    except Exception as exc:
        _logger.exception("Error in analyze-image function")
        return JSONResponse(
            {"error": error_message(container, exc, "An unexpected error occurred")},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JSONResponse(
        {"analysis": [record.to_wire() for record in outcome.records]}
    )


@router.post("/generate-audio")
async def generate_audio(
    request: Request, body: GenerateAudioRequest | None = None
) -> Response:
    """Synthesize speech for text and return the encoded audio."""
    container: AppContainer = request.app.state.container
    return await synthesize_response(container, body.text if body else None)


async def synthesize_response(container: AppContainer, text: str | None) -> Response:
    """Return audio bytes, or a JSON error with a timestamp."""
    try:
        audio = await container.audio_service.synthesize(text)
    except InvalidAudioRequest as exc:
        return _audio_error(str(exc), status.HTTP_400_BAD_REQUEST)
    except Exception as exc:
        _logger.exception("Error generating audio")
        return _audio_error(
            error_message(container, exc, "Failed to generate audio"),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return Response(content=audio.content, media_type=audio.media_type)


def error_message(container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback


def _audio_error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"error": message, "timestamp": datetime.now(tz=UTC).isoformat()},
        status_code=status_code,
    )
