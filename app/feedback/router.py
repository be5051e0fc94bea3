from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from app.core.llm.deps import get_app_settings, get_openai_client
from app.core.metrics import record_feedback_outcome
from app.core.settings import Settings
from app.domain.exceptions import ConfigurationError, FeedbackError, UnexpectedError
from app.feedback.service import FeedbackService
from app.feedback.validation import validate_feedback_payload
from app.feedback.variants import get_variant

router = APIRouter(prefix="/api", tags=["feedback"])
logger = logging.getLogger("app.feedback")


async def _read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""

    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


@router.options("/feedback", status_code=status.HTTP_204_NO_CONTENT, include_in_schema=False)
async def feedback_options() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/feedback")
async def create_feedback(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    openai_client=Depends(get_openai_client),
) -> dict[str, Any]:
    """
    Evaluate a learner response and return coaching feedback.

    IMPORTANT:
    - Nothing is persisted; each call is independent.
    - Member statements, learner responses and model output are never logged.
    """

    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    variant_name = settings.feedback_variant

    try:
        feedback_request = validate_feedback_payload(await _read_json_body(request))

        variant = get_variant(variant_name)
        if openai_client is None:
            raise ConfigurationError(details="Missing OPENAI_API_KEY.")

        svc = FeedbackService(llm_client=openai_client, variant=variant)
        body = await svc.evaluate(feedback_request)
    except FeedbackError as exc:
        # Logged by the FeedbackError exception handler.
        record_feedback_outcome(variant=variant_name, outcome=type(exc).__name__)
        raise
    except Exception as exc:  # noqa: BLE001 - every failure still gets a JSON envelope
        logger.exception(
            "Feedback failed unexpectedly",
            extra={"request_id": request_id, "variant": variant_name, "outcome": "error"},
        )
        record_feedback_outcome(variant=variant_name, outcome="UnexpectedError")
        raise UnexpectedError(details=str(exc)) from exc

    logger.info(
        "Feedback generated",
        extra={"request_id": request_id, "variant": variant_name, "outcome": "success"},
    )
    record_feedback_outcome(variant=variant_name, outcome="success")
    return body
