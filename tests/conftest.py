from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests build Settings explicitly; never pick up a developer's real key or variant.
    for name in ("OPENAI_API_KEY", "FEEDBACK_VARIANT", "CORS_ALLOWED_ORIGIN", "ALLOWED_ORIGIN"):
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees a clean environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
