from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.exceptions import FeedbackError, MethodNotAllowedError

logger = logging.getLogger("app.errors")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers. Every error leaves as `{error, ...}` JSON."""

    @app.exception_handler(FeedbackError)
    async def handle_feedback_error(request: Request, exc: FeedbackError) -> JSONResponse:
        # IMPORTANT: do not log request bodies or error details (may echo learner text).
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        log = logger.warning if exc.status_code >= 500 else logger.info
        log(
            "Feedback request failed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 405:
            return JSONResponse(
                status_code=405,
                content=MethodNotAllowedError().to_content(),
                headers=exc.headers,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )
