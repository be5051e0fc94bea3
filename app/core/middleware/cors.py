"""CORS for the e-learning player.

Starlette answers preflights with `200 OK` text and rejects them with plain text. The
feedback endpoint contract is an empty 204 on success and a JSON `{error}` envelope on
rejection, so only the preflight response shape changes here.
"""

from __future__ import annotations

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

_BODY_HEADERS = {"content-length", "content-type"}


class FeedbackCORSMiddleware(CORSMiddleware):
    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }

        if response.status_code < 400:
            return Response(status_code=204, headers=headers)

        # e.g. "Disallowed CORS origin" / "Disallowed CORS headers"
        message = bytes(response.body).decode("utf-8", errors="replace")
        return JSONResponse(
            status_code=response.status_code, content={"error": message}, headers=headers
        )
