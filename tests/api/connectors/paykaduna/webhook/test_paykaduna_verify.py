"""Testes da verificação HMAC-SHA512 de webhooks."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from api.connectors.paykaduna.errors import ConfigurationError
from api.connectors.paykaduna.webhook.verify import (
    MissingSignatureError,
    SignatureMismatchError,
    WebhookVerifier,
    compute_webhook_signature,
    verify_webhook_signature,
)

BODY = b'{"event":"charge.success","data":{"invoiceNo":"INV1"},"message":"ok"}'


def _sign(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha512).hexdigest()


def test_compute_signature_is_sha512_hex() -> None:
    signature = compute_webhook_signature(BODY, "whsec")

    assert signature == _sign(BODY, "whsec")
    assert len(signature) == 128


def test_verify_accepts_own_signature() -> None:
    assert verify_webhook_signature(BODY, _sign(BODY, "whsec"), "whsec") is True


def test_verify_rejects_signature_from_other_secret() -> None:
    assert verify_webhook_signature(BODY, _sign(BODY, "wrong"), "whsec") is False


def test_verify_rejects_empty_or_non_string_signature() -> None:
    assert verify_webhook_signature(BODY, "", "whsec") is False
    assert verify_webhook_signature(BODY, None, "whsec") is False
    assert verify_webhook_signature(BODY, ["abc"], "whsec") is False


def test_verify_requires_secret() -> None:
    with pytest.raises(ConfigurationError):
        verify_webhook_signature(BODY, "abc", "")

    with pytest.raises(ConfigurationError):
        WebhookVerifier("")


def test_invalid_mode_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        WebhookVerifier("whsec", mode="other")  # type: ignore[arg-type]


def test_verify_request_ok_with_any_header_case() -> None:
    verifier = WebhookVerifier("whsec")

    verifier.verify_request(BODY, {"X-PayKaduna-Signature": _sign(BODY, "whsec")})
    verifier.verify_request(BODY, {"x-paykaduna-signature": _sign(BODY, "whsec")})


def test_verify_request_missing_header() -> None:
    verifier = WebhookVerifier("whsec")

    with pytest.raises(MissingSignatureError):
        verifier.verify_request(BODY, {})

    with pytest.raises(MissingSignatureError):
        verifier.verify_request(BODY, {"x-paykaduna-signature": ""})


def test_verify_request_mismatch() -> None:
    verifier = WebhookVerifier("whsec")

    with pytest.raises(SignatureMismatchError):
        verifier.verify_request(BODY, {"x-paykaduna-signature": _sign(BODY, "wrong")})


def test_raw_mode_is_sensitive_to_whitespace() -> None:
    spaced = b'{"event": "charge.success", "data": {"invoiceNo": "INV1"}, "message": "ok"}'
    verifier = WebhookVerifier("whsec")

    assert verifier.verify(spaced, _sign(BODY, "whsec")) is False
    assert verifier.verify(spaced, _sign(spaced, "whsec")) is True


def test_reserialized_mode_hashes_minified_json() -> None:
    spaced = b'{"event": "charge.success", "data": {"invoiceNo": "INV1"}, "message": "ok"}'
    verifier = WebhookVerifier("whsec", mode="reserialized")

    assert verifier.mode == "reserialized"
    assert verifier.verify(spaced, _sign(BODY, "whsec")) is True


def test_reserialized_mode_falls_back_to_raw_for_invalid_json() -> None:
    verifier = WebhookVerifier("whsec", mode="reserialized")

    assert verifier.verify(b"{oops", _sign(b"{oops", "whsec")) is True
