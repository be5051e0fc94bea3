from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cross-origin access for the e-learning player (wildcard or a deployed origin).
    cors_allowed_origin: str = Field(
        default="*",
        validation_alias=AliasChoices("CORS_ALLOWED_ORIGIN", "ALLOWED_ORIGIN", "cors_allowed_origin"),
        description="Origin allowed to call the feedback endpoint ('*' for any).",
    )

    # Which prompt/schema iteration the endpoint serves.
    feedback_variant: str = Field(
        default="coaching",
        validation_alias=AliasChoices("FEEDBACK_VARIANT", "feedback_variant"),
        description="Schema variant: criteria|scores|coaching.",
    )

    # LLM integration (OpenAI)
    # IMPORTANT: learner and member text is sent upstream but never logged here.
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
        description="OpenAI API key (required for /api/feedback).",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("OPENAI_MODEL", "openai_model"),
        description="OpenAI model identifier used for feedback generation.",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
        description="Base URL for OpenAI API (override for proxies/emulators).",
    )
    openai_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("OPENAI_TIMEOUT_SECONDS", "openai_timeout_seconds"),
        description="Timeout for OpenAI API requests (seconds).",
    )
    openai_temperature: float | None = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("OPENAI_TEMPERATURE", "openai_temperature"),
        description="Sampling temperature; unset to use the model default.",
    )
    openai_max_output_tokens: int = Field(
        default=260,
        ge=16,
        validation_alias=AliasChoices("OPENAI_MAX_OUTPUT_TOKENS", "openai_max_output_tokens"),
        description="Upper bound on generated tokens per evaluation.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
