from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CHANNEL = "chat"


class FeedbackRequest(BaseModel):
    """Validated inbound payload. Request-scoped and never mutated."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    scenario_id: Any = Field(default=None, alias="scenarioId")
    channel: str = Field(default=DEFAULT_CHANNEL)
    member_statement: str = Field(min_length=1, alias="memberStatement")
    learner_response: str = Field(min_length=1, alias="learnerResponse")
