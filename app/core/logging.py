"""JSON-lines logging for the feedback service.

Every record becomes one JSON object on stdout. Records carry request metadata
(request id, method, route template, status, timing) and, for feedback calls, the schema
variant and outcome. Learner responses, member statements, prompts and model text are
never passed to a logger, so they cannot reach the output.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import UTC, datetime
from typing import Any


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Output key -> record attributes to try, in order. Always emitted (null when absent).
_CORE_FIELDS: dict[str, tuple[str, ...]] = {
    "request_id": ("request_id",),
    "method": ("method", "http_method"),
    "path": ("path", "request_path"),
    "status_code": ("status_code",),
    "duration_ms": ("duration_ms",),
}
# Emitted only when set on the record.
_FEEDBACK_FIELDS = ("variant", "outcome", "error")


def _first_attr(record: logging.LogRecord, names: tuple[str, ...]) -> Any:
    for name in names:
        value = getattr(record, name, None)
        if value is not None:
            return value
    return None


class JsonFormatter(logging.Formatter):
    """Render a record as JSON; third-party records without our `extra` keys are fine."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update((key, _first_attr(record, names)) for key, names in _CORE_FIELDS.items())
        payload.update(
            (name, getattr(record, name))
            for name in _FEEDBACK_FIELDS
            if getattr(record, name, None) is not None
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def build_logging_config(level: str = LOG_LEVEL) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": JsonFormatter}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
        # httpx logs every outbound URL at INFO.
        "loggers": {"httpx": {"level": "WARNING"}},
    }


def setup_logging() -> None:
    logging.config.dictConfig(build_logging_config())
