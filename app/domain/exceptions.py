from __future__ import annotations

from typing import Any


class FeedbackError(Exception):
    """Base error for the feedback pipeline. Always terminal for the current request."""

    status_code: int = 500
    error: str = "Server error"

    def __init__(self, message: str | None = None, *, details: Any = None):
        super().__init__(message or self.error)
        self.message = message or self.error
        self.details = details

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return content


class ValidationError(FeedbackError):
    """Raised when required request fields are missing or not non-empty strings."""

    status_code = 400
    error = "Missing required field(s)."

    def __init__(self, *, missing: list[str]):
        super().__init__(f"Missing required field(s): {', '.join(missing)}.")
        self.missing = list(missing)

    def to_content(self) -> dict[str, Any]:
        return {"error": self.message, "required": self.missing}


class MethodNotAllowedError(FeedbackError):
    status_code = 405
    error = "Use POST with JSON body."


class ConfigurationError(FeedbackError):
    """Raised when the service is missing required configuration (operator's fault)."""

    error = "Server misconfigured"


class UpstreamError(FeedbackError):
    """Raised when the completion service fails; `details` holds the raw upstream payload."""

    error = "OpenAI request failed"


class MalformedModelOutputError(FeedbackError):
    """Raised when the model text is not a JSON object; `details` holds the raw text."""

    error = "Model returned invalid JSON"

    def __init__(self, *, raw: str):
        super().__init__(details=raw)
        self.raw = raw


class UnexpectedError(FeedbackError):
    error = "Server error"
