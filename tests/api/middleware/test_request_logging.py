"""Testes do middleware de log de requests."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from api.middleware import RequestLoggingMiddleware
from app.observability import get_correlation_id


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/ok")
    async def ok() -> dict[str, str]:
        return {"correlation_id": get_correlation_id()}

    @app.get("/missing")
    async def missing() -> None:
        raise HTTPException(status_code=404)

    return app


def test_propagates_correlation_id(caplog: pytest.LogCaptureFixture) -> None:
    client = TestClient(_app())

    with caplog.at_level(logging.INFO, logger="api.middleware.request_logging"):
        response = client.get("/ok", headers={"x-correlation-id": "cid-42"})

    assert response.json() == {"correlation_id": "cid-42"}
    assert response.headers["x-correlation-id"] == "cid-42"
    completed = [r for r in caplog.records if r.getMessage() == "http_request_completed"]
    assert completed[0].levelno == logging.INFO
    assert completed[0].status_code == 200


def test_generates_correlation_id_when_absent() -> None:
    response = TestClient(_app()).get("/ok")

    assert response.json()["correlation_id"]
    assert response.headers["x-correlation-id"] == response.json()["correlation_id"]


def test_error_responses_are_logged_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    client = TestClient(_app())

    with caplog.at_level(logging.INFO, logger="api.middleware.request_logging"):
        client.get("/missing")

    completed = [r for r in caplog.records if r.getMessage() == "http_request_completed"]
    assert completed[0].levelno == logging.WARNING
    assert completed[0].status_code == 404


def test_request_id_header_is_accepted() -> None:
    response = TestClient(_app()).get("/ok", headers={"x-request-id": "req-7"})

    assert response.json() == {"correlation_id": "req-7"}
