"""Testes da rota de webhook PayKaduna."""

from __future__ import annotations

import hashlib
import hmac
import json

import pytest
from starlette.requests import Request

from api.connectors.paykaduna.errors import ServerError
from api.connectors.paykaduna.webhook import WebhookVerifier
from api.routes.paykaduna import webhook
from app.infra.stores import MemoryBillStore
from app.services.bill_mirror import BillMirrorService
from app.use_cases.paykaduna import ProcessWebhookEventUseCase
from tests.fakes.paykaduna import FakePayKadunaService, bill_response

SECRET = "whsec"


def _build_request(*, body: bytes = b"", headers: dict[str, str] | None = None) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/api/v1/paykaduna/webhook",
        "raw_path": b"/api/v1/paykaduna/webhook",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _signed(payload: dict, secret: str = SECRET) -> tuple[bytes, dict[str, str]]:
    body = json.dumps(payload).encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()
    return body, {"x-paykaduna-signature": signature}


def _use_case(
    service: FakePayKadunaService | None = None,
    store: MemoryBillStore | None = None,
) -> ProcessWebhookEventUseCase:
    return ProcessWebhookEventUseCase(
        client=service or FakePayKadunaService(),
        bill_mirror=BillMirrorService(store if store is not None else MemoryBillStore()),
    )


@pytest.mark.asyncio
async def test_webhook_processes_signed_event() -> None:
    payload = {
        "event": "charge.success",
        "data": {"billReference": "B1", "invoiceNo": "INV1"},
        "message": "ok",
    }
    body, headers = _signed(payload)
    store = MemoryBillStore()
    service = FakePayKadunaService({"get_bill": bill_response("B1", pay_status="Paid")})

    response = await webhook.receive_webhook(
        _build_request(body=body, headers=headers),
        verifier=WebhookVerifier(SECRET),
        use_case=_use_case(service, store),
    )

    assert response.status_code == 200
    assert json.loads(response.body) == {
        "event": "charge.success",
        "data": {"billReference": "B1", "invoiceNo": "INV1"},
        "message": "Webhook event processed successfully",
    }
    record = await store.get("B1")
    assert record is not None
    assert record.invoice_no == "INV1"
    assert record.paid_at is not None
    assert service.calls == [("get_bill", "B1")]


@pytest.mark.asyncio
async def test_webhook_missing_signature_returns_401() -> None:
    body, _ = _signed({"event": "charge.success", "data": {}, "message": "ok"})

    response = await webhook.receive_webhook(
        _build_request(body=body),
        verifier=WebhookVerifier(SECRET),
        use_case=_use_case(),
    )

    assert response.status_code == 401
    assert json.loads(response.body) == {
        "event": "webhook.error",
        "data": {},
        "message": "Webhook signature is required",
    }


@pytest.mark.asyncio
async def test_webhook_wrong_secret_returns_401() -> None:
    body, headers = _signed(
        {"event": "charge.success", "data": {"invoiceNo": "INV1"}, "message": "ok"},
        secret="wrong",
    )
    service = FakePayKadunaService()

    response = await webhook.receive_webhook(
        _build_request(body=body, headers=headers),
        verifier=WebhookVerifier(SECRET),
        use_case=_use_case(service),
    )

    assert response.status_code == 401
    assert json.loads(response.body)["message"] == "Webhook signature validation failed"
    assert service.calls == []


@pytest.mark.asyncio
async def test_webhook_invalid_structure_returns_400() -> None:
    body, headers = _signed({"event": "charge.success", "data": "nope", "message": "ok"})

    response = await webhook.receive_webhook(
        _build_request(body=body, headers=headers),
        verifier=WebhookVerifier(SECRET),
        use_case=_use_case(),
    )

    assert response.status_code == 400
    assert json.loads(response.body) == {
        "event": "webhook.error",
        "data": {},
        "message": "Invalid request: data is required and must be an object",
    }


@pytest.mark.asyncio
async def test_webhook_invalid_json_returns_400() -> None:
    body = b"{not json"
    signature = hmac.new(SECRET.encode("utf-8"), body, hashlib.sha512).hexdigest()

    response = await webhook.receive_webhook(
        _build_request(body=body, headers={"x-paykaduna-signature": signature}),
        verifier=WebhookVerifier(SECRET),
        use_case=_use_case(),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_webhook_unexpected_error_returns_500() -> None:
    class _BrokenUseCase:
        async def execute(self, event: str, data: dict) -> None:
            raise RuntimeError("boom")

    body, headers = _signed({"event": "charge.success", "data": {}, "message": "ok"})

    response = await webhook.receive_webhook(
        _build_request(body=body, headers=headers),
        verifier=WebhookVerifier(SECRET),
        use_case=_BrokenUseCase(),  # type: ignore[arg-type]
    )

    assert response.status_code == 500
    assert json.loads(response.body)["message"] == "Internal server error"


@pytest.mark.asyncio
async def test_webhook_upstream_failure_still_returns_200() -> None:
    payload = {"event": "invoice.created", "data": {"billReference": "B9"}, "message": "ok"}
    body, headers = _signed(payload)
    service = FakePayKadunaService({"get_bill": ServerError("x", status_code=500)})

    response = await webhook.receive_webhook(
        _build_request(body=body, headers=headers),
        verifier=WebhookVerifier(SECRET),
        use_case=_use_case(service),
    )

    assert response.status_code == 200
