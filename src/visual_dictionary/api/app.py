"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from visual_dictionary.api.auth import router as auth_router
from visual_dictionary.api.functions import router as functions_router
from visual_dictionary.api.pages import router as pages_router
from visual_dictionary.api.routes import router as api_router
from visual_dictionary.app_logging import configure_logging
from visual_dictionary.containers import AppContainer

CORS_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting visual dictionary (%s)", container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Visual Dictionary", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            {"error": validation_message(exc)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    app.include_router(auth_router)
    app.include_router(functions_router)
    app.include_router(api_router)
    app.include_router(pages_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def validation_message(exc: RequestValidationError) -> str:
    """Describe the first invalid field of a request."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    fields = [
        part
        for part in first.get("loc", ())
        if isinstance(part, str) and part != "body"
    ]
    if not fields:
        return "Invalid request body"
    return f"{'.'.join(fields)}: {first.get('msg', 'Invalid value')}"
