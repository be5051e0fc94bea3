"""OpenAIClient against an in-process httpx.MockTransport (no network)."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from app.core.llm.openai_client import OpenAIClient, OpenAIConfig, extract_output_text
from app.domain.exceptions import UpstreamError

FORMAT = {"type": "json_object"}


def _client(handler, **config: Any) -> OpenAIClient:
    values: dict[str, Any] = {
        "api_key": "sk-test",
        "base_url": "https://llm.example/v1/",
        "model": "gpt-4o-mini",
        "timeout_seconds": 5.0,
        "temperature": 0.2,
        "max_output_tokens": 260,
    }
    values.update(config)
    return OpenAIClient(config=OpenAIConfig(**values), transport=httpx.MockTransport(handler))


def _generate(client: OpenAIClient) -> str:
    return asyncio.run(
        client.generate_text(system_prompt="sys", user_prompt="usr", text_format=FORMAT)
    )


def test_posts_one_responses_request_with_expected_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"output_text": '{"ok": true}'})

    assert _generate(_client(handler)) == '{"ok": true}'

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://llm.example/v1/responses"
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body == {
        "model": "gpt-4o-mini",
        "input": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "usr"},
        ],
        "text": {"format": FORMAT},
        "temperature": 0.2,
        "max_output_tokens": 260,
    }


def test_optional_sampling_settings_are_omitted_when_unset() -> None:
    seen: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"output_text": "{}"})

    _generate(_client(handler, temperature=None, max_output_tokens=None))
    assert "temperature" not in seen[0]
    assert "max_output_tokens" not in seen[0]


def test_falls_back_to_nested_output_content() -> None:
    payload = {
        "output_text": "",
        "output": [
            {"type": "reasoning", "content": []},
            {"type": "message", "content": [{"type": "output_text", "text": ' {"feedback": "hi"} '}]},
        ],
    }
    assert _generate(_client(lambda r: httpx.Response(200, json=payload))) == '{"feedback": "hi"}'


def test_output_text_field_takes_priority() -> None:
    payload = {
        "output_text": "first",
        "output": [{"content": [{"text": "second"}]}],
    }
    assert extract_output_text(payload) == "first"


@pytest.mark.parametrize("payload", [{}, {"output": []}, {"output": [{"content": None}]}, [], None])
def test_extract_output_text_returns_empty_when_absent(payload: Any) -> None:
    assert extract_output_text(payload) == ""


def test_non_success_status_raises_with_raw_body() -> None:
    client = _client(lambda r: httpx.Response(429, text='{"error": "rate limited"}'))
    with pytest.raises(UpstreamError) as excinfo:
        _generate(client)
    assert excinfo.value.details == '{"error": "rate limited"}'
    assert excinfo.value.to_content()["error"] == "OpenAI request failed"


def test_missing_output_text_raises() -> None:
    client = _client(lambda r: httpx.Response(200, json={"output": []}))
    with pytest.raises(UpstreamError) as excinfo:
        _generate(client)
    assert excinfo.value.message == "No output text returned from OpenAI."


def test_transport_error_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        _generate(_client(handler))
    assert "connection refused" in excinfo.value.details


def test_timeout_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        _generate(_client(handler))
    assert excinfo.value.details == "LLM request timed out"
