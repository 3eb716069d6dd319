"""JSON endpoints used by the browser shell."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from fastapi.responses import JSONResponse

from visual_dictionary.api.functions import error_message, synthesize_response
from visual_dictionary.api.models import GenerateAudioRequest  # noqa: TC001
from visual_dictionary.api.session import require_session
from visual_dictionary.domain.lookup import WordDetail
from visual_dictionary.domain.words import WordAnalysis
from visual_dictionary.services.analysis import (
    ImageUploadError,
    InvalidAnalysisRequest,
)
from visual_dictionary.services.word_lookup import WordLookupError

if TYPE_CHECKING:
    from visual_dictionary.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api", tags=["api"], dependencies=[Depends(require_session)]
)


@router.post("/analyses")
async def upload_and_analyze(
    request: Request, file: UploadFile = File(...)
) -> Response:
    """Store an uploaded image, analyze it and save the words."""
    container: AppContainer = request.app.state.container
    content = await file.read()
    try:
        outcome = await container.analysis_service.analyze_upload(
            file.filename or "", content, file.content_type
        )
    except InvalidAnalysisRequest as exc:
        return JSONResponse(
            {"error": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST
        )
    except ImageUploadError as exc:
        _logger.exception("Upload error", extra={"upload_name": file.filename})
        return JSONResponse(
            {"error": error_message(container, exc, "Failed to upload image")},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    except Exception as exc:
        _logger.exception("Failed to process image")
        return JSONResponse(
            {"error": error_message(container, exc, "Failed to process image")},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JSONResponse(
        {
            "image_url": outcome.image_url,
            "analysis": [record.to_wire() for record in outcome.records],
            "saved": len(outcome.saved),
            "failed_inserts": outcome.failed_inserts,
            "fallback": outcome.fallback,
        }
    )


@router.get("/words", response_model=None)
async def list_words(
    request: Request,
    q: str | None = None,
    sort: Literal["asc", "desc"] | None = None,
) -> dict[str, list[WordAnalysis]] | Response:
    """Return saved words, optionally filtered and sorted."""
    container: AppContainer = request.app.state.container
    try:
        words = container.dictionary_service.list_words(query=q, sort=sort)
    except Exception as exc:
        _logger.exception("Failed to load words", extra={"query": q})
        return JSONResponse(
            {"error": error_message(container, exc, "Failed to load words")},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return {"words": words}


@router.get("/words/{word}/details", response_model=None)
async def word_details(word: str, request: Request) -> WordDetail | Response:
    """Return dictionary details for a word."""
    container: AppContainer = request.app.state.container
    try:
        return await container.word_lookup_service.lookup(word)
    except WordLookupError as exc:
        return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@router.post("/audio")
async def audio(
    request: Request, body: GenerateAudioRequest | None = None
) -> Response:
    """Synthesize speech for a word."""
    container: AppContainer = request.app.state.container
    return await synthesize_response(container, body.text if body else None)
