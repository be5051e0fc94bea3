from __future__ import annotations

from typing import Any, Protocol

from app.feedback.coaching import build_coaching_message, parse_model_output
from app.feedback.prompt import build_feedback_prompts
from app.feedback.schemas import FeedbackRequest
from app.feedback.variants import FeedbackVariant


class LLMClient(Protocol):
    async def generate_text(
        self, *, system_prompt: str, user_prompt: str, text_format: dict[str, Any]
    ) -> str: ...


class FeedbackService:
    """Validated request -> one completion call -> normalized evaluation body."""

    def __init__(self, *, llm_client: LLMClient, variant: FeedbackVariant):
        self._llm = llm_client
        self._variant = variant

    async def evaluate(self, request: FeedbackRequest) -> dict[str, Any]:
        system_prompt, user_prompt = build_feedback_prompts(request=request, variant=self._variant)

        # UpstreamError propagates unchanged; there is no retry or fallback.
        text = await self._llm.generate_text(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            text_format=self._variant.text_format(),
        )
        result = parse_model_output(text)

        body: dict[str, Any] = {"scenarioId": request.scenario_id}
        body.update((k, v) for k, v in result.items() if k != "scenarioId")

        # A model-written coaching message is passed through byte-identical.
        if self._variant.model_coaching and isinstance(result.get("coachingMessage"), str):
            return body
        body["coachingMessage"] = build_coaching_message(result)
        return body
