from __future__ import annotations

import pytest

from app.domain.exceptions import ValidationError
from app.feedback.validation import validate_feedback_payload


def test_valid_payload_builds_request() -> None:
    req = validate_feedback_payload(
        {
            "scenarioId": 7,
            "channel": "phone",
            "memberStatement": "Why was I billed twice?",
            "learnerResponse": "I can see why that's worrying. Let me check both charges.",
        }
    )
    assert req.scenario_id == 7
    assert req.channel == "phone"
    assert req.member_statement == "Why was I billed twice?"
    assert req.learner_response.startswith("I can see why")


@pytest.mark.parametrize("channel", [None, "", 3])
def test_channel_falls_back_to_chat(channel: object) -> None:
    payload = {"memberStatement": "m", "learnerResponse": "l"}
    if channel is not None:
        payload["channel"] = channel
    req = validate_feedback_payload(payload)
    assert req.channel == "chat"
    assert req.scenario_id is None


@pytest.mark.parametrize("payload", [None, [], "text", 12, {}])
def test_non_object_or_empty_payload_lists_both_fields(payload: object) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_feedback_payload(payload)
    assert excinfo.value.missing == ["memberStatement", "learnerResponse"]
    assert excinfo.value.status_code == 400
    assert excinfo.value.to_content()["required"] == ["memberStatement", "learnerResponse"]


def test_whitespace_only_text_is_accepted() -> None:
    req = validate_feedback_payload({"memberStatement": " ", "learnerResponse": "ok"})
    assert req.member_statement == " "
