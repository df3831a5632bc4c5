from __future__ import annotations

import pytest

from app.core.config import get_settings


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AUTH_PROVIDER", "mock")
    monkeypatch.delenv("AUTH_DOMAIN", raising=False)
    monkeypatch.setenv("INTERNAL_SECRET", "test-internal-secret")
    monkeypatch.setenv("APP_URL", "https://miniapp.example")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def anyio_backend():
    return "asyncio"
