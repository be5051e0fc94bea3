"""Schema variants: which fields the model is asked to produce, and how.

Each variant is one iteration of the prompt/schema design. The endpoint serves exactly
one of them, selected by `Settings.feedback_variant`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.exceptions import ConfigurationError

_BINARY_SCORE: dict[str, Any] = {"type": "integer", "enum": [0, 1]}

_SCORES: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "empathyFirst": _BINARY_SCORE,
        "correctEmotion": _BINARY_SCORE,
        "offerHelp": _BINARY_SCORE,
    },
    "required": ["empathyFirst", "correctEmotion", "offerHelp"],
}

_OVERALL: dict[str, Any] = {"type": "string", "enum": ["pass", "needs_work"]}


@dataclass(frozen=True)
class FeedbackVariant:
    name: str
    schema_name: str
    output_schema: dict[str, Any]
    # True: strict json_schema output. False: schema described in prose, json_object output.
    strict_schema: bool
    # True: the model writes coachingMessage itself and it is passed through untouched.
    model_coaching: bool
    output_guidance: tuple[str, ...] = ()

    def text_format(self) -> dict[str, Any]:
        """The `text.format` block for the Responses API."""

        if self.strict_schema:
            return {
                "type": "json_schema",
                "name": self.schema_name,
                "strict": True,
                "schema": self.output_schema,
            }
        return {"type": "json_object"}


CRITERIA = FeedbackVariant(
    name="criteria",
    schema_name="empathy_feedback_v1",
    strict_schema=True,
    model_coaching=False,
    output_schema={
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "empathy_first": {"type": "boolean"},
            "emotion_match": {"type": "boolean"},
            "offer_to_help": {"type": "boolean"},
            "expected_emotions": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
                "maxItems": 3,
            },
            "learner_emotion_language": {
                "type": "string",
                "description": "What emotion words/phrases the learner used (or 'none').",
            },
            "feedback": {
                "type": "string",
                "description": "Friendly, specific coaching. Keep to 2-4 sentences.",
            },
            "examples": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
                "maxItems": 2,
            },
        },
        "required": [
            "empathy_first",
            "emotion_match",
            "offer_to_help",
            "expected_emotions",
            "learner_emotion_language",
            "feedback",
            "examples",
        ],
    },
    output_guidance=(
        "- If the learner misses any criteria: give specific feedback on what is missing and provide 1-2 good example responses.",
        "- If the learner meets all three: give positive reinforcement and provide 1-2 alternative strong example responses.",
    ),
)

SCORES = FeedbackVariant(
    name="scores",
    schema_name="empathy_feedback_v2",
    strict_schema=False,
    model_coaching=False,
    output_schema={
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "scores": _SCORES,
            "overall": _OVERALL,
            "detectedEmotion": {
                "type": "string",
                "description": "The main emotion implied by the member statement.",
            },
            "feedback": {
                "type": "string",
                "description": "1-2 sentences explaining what worked and what is missing.",
            },
            "examples": {
                "type": "array",
                "items": {"type": "string"},
                "maxItems": 2,
            },
            "rewriteSuggestion": {
                "type": "string",
                "description": "A full improved version of the learner response, 1-2 sentences.",
            },
        },
        "required": ["scores", "overall", "detectedEmotion", "feedback", "examples", "rewriteSuggestion"],
    },
    output_guidance=(
        "- Scores are 1 when the criterion is met and 0 when it is not.",
        "- overall is 'pass' only when all three scores are 1, otherwise 'needs_work'.",
        "- rewriteSuggestion must be a concrete response the learner could say, not praise.",
    ),
)

COACHING = FeedbackVariant(
    name="coaching",
    schema_name="empathy_feedback_v3",
    strict_schema=True,
    model_coaching=True,
    output_schema={
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "scores": _SCORES,
            "overall": _OVERALL,
            "detectedEmotion": {"type": "string"},
            "coachingMessage": {
                "type": "string",
                "description": (
                    "One short paragraph for the learner: what worked, what is missing, "
                    "and one example sentence they could say."
                ),
            },
        },
        "required": ["scores", "overall", "detectedEmotion", "coachingMessage"],
    },
    output_guidance=(
        "- coachingMessage speaks directly to the learner in 2-3 sentences.",
        "- End coachingMessage with one example sentence that starts with empathy language, then offers help.",
    ),
)

VARIANTS: dict[str, FeedbackVariant] = {v.name: v for v in (CRITERIA, SCORES, COACHING)}


def get_variant(name: str) -> FeedbackVariant:
    try:
        return VARIANTS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            details=f"Unknown feedback variant {name!r}. Supported: {', '.join(VARIANTS)}."
        ) from None
