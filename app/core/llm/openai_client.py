from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from app.domain.exceptions import UpstreamError


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float
    temperature: float | None = None
    max_output_tokens: int | None = None


def extract_output_text(data: Any) -> str:
    """
    Return the model text from a Responses API payload.

    The dedicated `output_text` field wins; otherwise the first non-empty `text`
    found in `output[].content[]` is used. Returns "" when neither exists.
    """

    if not isinstance(data, dict):
        return ""

    output_text = data.get("output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text.strip()

    for item in data.get("output") or []:
        if not isinstance(item, dict):
            continue
        for part in item.get("content") or []:
            if not isinstance(part, dict):
                continue
            text = part.get("text")
            if isinstance(text, str) and text.strip():
                return text.strip()

    return ""


class OpenAIClient:
    """
    Minimal OpenAI Responses API client returning the raw model text.

    Design notes:
    - No logging in this module (prompts/outputs contain learner text).
    - One request per call; no retries. Failures surface as UpstreamError.
    - JSON parsing of the model text is left to the caller.
    """

    def __init__(self, *, config: OpenAIConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    async def generate_text(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        text_format: dict[str, Any],
    ) -> str:
        url = f"{self._config.base_url.rstrip('/')}/responses"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "input": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "text": {"format": text_format},
        }
        if self._config.temperature is not None:
            payload["temperature"] = self._config.temperature
        if self._config.max_output_tokens is not None:
            payload["max_output_tokens"] = self._config.max_output_tokens

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise UpstreamError(details="LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(details=str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            raise UpstreamError(details=resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError("OpenAI response was not JSON", details=resp.text) from exc

        output_text = extract_output_text(data)
        if not output_text:
            raise UpstreamError("No output text returned from OpenAI.", details=resp.text)

        return output_text
