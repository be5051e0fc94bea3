from __future__ import annotations

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.cors import FeedbackCORSMiddleware
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import Settings, get_settings
from app.feedback.router import router as feedback_router

setup_logging()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit Settings object (defaults to the environment)."""

    settings = settings or get_settings()

    app = FastAPI(
        title="Empathy Feedback API",
        description=(
            "Coaching feedback for simulated customer-service responses.\n\n"
            "Design principles:\n"
            "- One LLM call per request; nothing is stored and nothing is retried.\n"
            "- Every failure returns a JSON `{error, ...}` envelope.\n"
            "- Logging and metrics carry metadata only, never learner or member text."
        ),
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "feedback",
                "description": "Evaluate a learner response against the empathy rubric.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )
    app.state.settings = settings

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    # Outermost: preflights get an empty 204 (or a JSON error) before any other processing.
    app.add_middleware(
        FeedbackCORSMiddleware,
        allow_origins=[settings.cors_allowed_origin],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint intentionally does not call the completion service."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok", variant=settings.feedback_variant)

    app.include_router(metrics_router)
    app.include_router(feedback_router)
    return app


app = create_app()
