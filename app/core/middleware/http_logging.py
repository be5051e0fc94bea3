"""HTTP logging middleware.

- Logs request metadata only: no bodies, query strings or headers. Bodies hold
  member statements and learner responses.
- Generates or propagates X-Request-ID so feedback logs can be correlated.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def get_or_create_request_id(*, request: Request) -> str:
    """Propagate a well-formed incoming X-Request-ID, otherwise mint a UUID4 hex id."""

    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def _route_template(*, request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) and path else "unmatched"


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request, plus X-Request-ID on every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = get_or_create_request_id(request=request)
        started = time.perf_counter()
        request.state.request_id = request_id

        def _extra(status_code: int) -> dict[str, object]:
            return {
                "request_id": request_id,
                "http_method": request.method,
                "request_path": _route_template(request=request),
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
            }

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception("Unhandled exception while processing request", extra=_extra(500))
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info("Request completed", extra=_extra(response.status_code))
        return response
