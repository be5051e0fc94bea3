from __future__ import annotations

from typing import Any

from app.domain.exceptions import ValidationError
from app.feedback.schemas import DEFAULT_CHANNEL, FeedbackRequest

REQUIRED_FIELDS: tuple[str, ...] = ("memberStatement", "learnerResponse")


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_feedback_payload(payload: Any) -> FeedbackRequest:
    """
    Validate a decoded JSON body and build a FeedbackRequest.

    Anything other than a JSON object is treated as a body with no fields. Raises
    ValidationError listing every missing required field, in declaration order.
    """

    body: dict[str, Any] = payload if isinstance(payload, dict) else {}

    missing = [name for name in REQUIRED_FIELDS if not _is_non_empty_string(body.get(name))]
    if missing:
        raise ValidationError(missing=missing)

    channel = body.get("channel")
    if not isinstance(channel, str) or not channel:
        channel = DEFAULT_CHANNEL

    return FeedbackRequest(
        scenarioId=body.get("scenarioId"),
        channel=channel,
        memberStatement=body["memberStatement"],
        learnerResponse=body["learnerResponse"],
    )
