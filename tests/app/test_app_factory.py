"""Testes do app FastAPI montado por create_app."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.connectors.paykaduna.errors import ConfigurationError
from app.app import create_app
from config.settings import get_base_settings, get_paykaduna_settings


@pytest.fixture(autouse=True)
def _clear_caches():
    get_base_settings.cache_clear()
    get_paykaduna_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_paykaduna_settings.cache_clear()


def test_all_routes_are_registered() -> None:
    paths = set(create_app().openapi()["paths"])

    assert {
        "/health",
        "/v1/bills",
        "/v1/bills/bulk",
        "/v1/bills/{reference}",
        "/v1/bills/{reference}/invoice-url",
        "/v1/bills/{reference}/metadata",
        "/v1/bills/metadata/bulk",
        "/v1/taxpayers",
        "/v1/taxpayers/search",
        "/v1/payments/initialize",
        "/v1/configuration/redirect-url",
        "/api/v1/paykaduna/webhook",
    } <= paths


def test_startup_fails_without_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PK_API_KEY", "")
    monkeypatch.setenv("PK_WEBHOOK_SECRET_KEY", "")

    with pytest.raises(ConfigurationError), TestClient(create_app()):
        pass


def test_startup_and_health_with_valid_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("PK_API_KEY", "api-key")
    monkeypatch.setenv("PK_WEBHOOK_SECRET_KEY", "whsec")

    with TestClient(create_app()) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.headers["x-correlation-id"]
