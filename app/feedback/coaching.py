"""Coaching message synthesis from a parsed evaluation.

Only used by variants where the model does not write `coachingMessage` itself. All
functions are pure and operate on the model's JSON object as returned.
"""

from __future__ import annotations

import json
import re
from typing import Any

from app.domain.exceptions import MalformedModelOutputError

MAX_EXAMPLE_SENTENCES = 2
MIN_REWRITE_CHARS = 20

_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+|[^.!?]+$")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_TRAILING_PUNCTUATION_PATTERN = re.compile(r"[\s.!?,;:]+$")
_GENERIC_PRAISE_PREFIX = re.compile(r"^your response", re.IGNORECASE)
_GENERIC_PRAISE_PHRASES = re.compile(r"keep up|great job", re.IGNORECASE)

_SCORE_KEYS = ("empathyFirst", "correctEmotion", "offerHelp")
_CRITERIA_KEYS = ("empathy_first", "emotion_match", "offer_to_help")


def parse_model_output(text: str) -> dict[str, Any]:
    """Parse the model text as a JSON object. No repair is attempted."""

    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        raise MalformedModelOutputError(raw=text) from None
    if not isinstance(parsed, dict):
        raise MalformedModelOutputError(raw=text)
    return parsed


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def cap_sentences(text: str, limit: int = MAX_EXAMPLE_SENTENCES) -> str:
    """
    Keep at most `limit` sentences.

    A sentence is a run of text ending in `.`, `!` or `?`; an unterminated tail counts
    as the last sentence.
    """

    sentences = [s.strip() for s in _SENTENCE_PATTERN.findall(text)]
    return " ".join([s for s in sentences if s][:limit])


def looks_like_generic_praise(text: str) -> bool:
    """True when a rewrite suggestion is too vague to show as an example."""

    candidate = text.strip()
    if len(candidate) < MIN_REWRITE_CHARS:
        return True
    if _GENERIC_PRAISE_PREFIX.match(candidate):
        return True
    return bool(_GENERIC_PRAISE_PHRASES.search(candidate))


def _with_period(text: str) -> str:
    return _TRAILING_PUNCTUATION_PATTERN.sub("", text) + "."


def select_example(result: dict[str, Any]) -> str:
    """Pick at most one example utterance: an acceptable rewrite first, then `examples`."""

    rewrite = result.get("rewriteSuggestion")
    if isinstance(rewrite, str) and rewrite.strip() and not looks_like_generic_praise(rewrite):
        return cap_sentences(collapse_whitespace(rewrite))

    raw_examples = result.get("examples")
    examples = [
        e.strip()
        for e in (raw_examples if isinstance(raw_examples, list) else [])
        if isinstance(e, str) and e.strip()
    ]
    if len(examples) >= 2:
        combined = collapse_whitespace(f"{_with_period(examples[0])} {examples[1]}")
        return cap_sentences(combined)
    if len(examples) == 1:
        return cap_sentences(collapse_whitespace(examples[0]))
    return ""


def is_perfect(result: dict[str, Any]) -> bool:
    """
    All three criteria satisfied, from either the `scores` object or the boolean fields.

    A criterion counts as met when it is `true` or a number equal to 1 (`1`, `1.0`).
    Strings such as "1" do not count; json_object mode does not enforce types.
    """

    scores = result.get("scores")
    if isinstance(scores, dict):
        values = [scores.get(key) for key in _SCORE_KEYS]
    else:
        values = [result.get(key) for key in _CRITERIA_KEYS]
    return all(isinstance(v, (bool, int, float)) and v == 1 for v in values)


def build_coaching_message(result: dict[str, Any]) -> str:
    feedback = result.get("feedback")
    parts = [feedback if isinstance(feedback, str) else ""]

    example = select_example(result)
    if example:
        if example[-1] not in ".!?":
            example += "."
        lead = "You could also say:" if is_perfect(result) else "You could say:"
        parts.append(f"{lead} {example}")

    return collapse_whitespace(" ".join(parts))
