from __future__ import annotations

from fastapi import Request

from app.core.llm.openai_client import OpenAIClient, OpenAIConfig
from app.core.settings import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    """Settings the app was constructed with (falls back to the process-wide settings)."""

    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


def get_openai_client(request: Request) -> OpenAIClient | None:
    """
    Dependency provider for OpenAIClient.

    Returns None when not configured so the route can validate the request first and
    then report a ConfigurationError instead of failing during dependency resolution.
    """

    settings = get_app_settings(request)
    if not settings.openai_api_key:
        return None

    config = OpenAIConfig(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout_seconds=float(settings.openai_timeout_seconds),
        temperature=settings.openai_temperature,
        max_output_tokens=int(settings.openai_max_output_tokens),
    )
    return OpenAIClient(config=config)
