"""Middleware setup for vera-voice server."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..exceptions import QuotaExceededError, VeraVoiceError

logger = logging.getLogger(__name__)

MAX_DETAIL_CHARS = 500


def error_content(exc: VeraVoiceError) -> dict:
    content: dict = {"error": exc.message, "errorType": exc.error_type}
    if exc.detail:
        content["detail"] = exc.detail[:MAX_DETAIL_CHARS]
    if isinstance(exc, QuotaExceededError):
        content["retryDelay"] = exc.retry_delay
    return content


def setup_middleware(app: FastAPI, allow_origins: tuple[str, ...] = ("*",)) -> None:
    """Configure middleware for the FastAPI application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allow_origins),
        allow_credentials="*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(VeraVoiceError)
    async def vera_voice_exception_handler(
        request: Request, exc: VeraVoiceError
    ) -> JSONResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "%s %s failed: status=%d type=%s message=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.error_type,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=error_content(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(
                str(p) for p in first.get("loc", ()) if p != "body" and not isinstance(p, int)
            )
            message = f"Invalid request: {location or 'body'}: {first.get('msg', 'invalid')}"
        else:
            message = "Invalid request body"
        logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=400,
            content={"error": message, "errorType": "invalid_argument"},
        )
