"""Verificação HMAC-SHA512 de webhooks do PayKaduna.

O provedor envia `x-paykaduna-signature` com o hex do HMAC-SHA512 do body.
Esquema independente da assinatura de saída (SHA256/base64, outra chave).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from collections.abc import Mapping
from typing import Literal

from ..errors import ConfigurationError
from ..signing import minify_json

logger = logging.getLogger(__name__)

WEBHOOK_SIGNATURE_HEADER = "x-paykaduna-signature"

# raw: hash dos bytes recebidos; reserialized: hash do JSON re-serializado (legado)
SignatureMode = Literal["raw", "reserialized"]
SIGNATURE_MODES: frozenset[str] = frozenset({"raw", "reserialized"})


class WebhookVerificationError(ValueError):
    """Erro base de autenticação do webhook."""


class MissingSignatureError(WebhookVerificationError):
    """Header de assinatura ausente ou vazio."""


class SignatureMismatchError(WebhookVerificationError):
    """Assinatura presente mas divergente."""


def _as_bytes(payload: bytes | str) -> bytes:
    return payload.encode("utf-8") if isinstance(payload, str) else payload


def compute_webhook_signature(payload: bytes | str, secret_key: str) -> str:
    """HMAC-SHA512 do payload em hex."""
    return hmac.new(secret_key.encode("utf-8"), _as_bytes(payload), hashlib.sha512).hexdigest()


def verify_webhook_signature(
    raw_body: bytes | str,
    provided_signature: object,
    secret_key: str,
) -> bool:
    """Compara a assinatura recebida com a calculada (tempo constante)."""
    if not secret_key:
        raise ConfigurationError("PK_WEBHOOK_SECRET_KEY é obrigatório para verificar webhooks")
    if not isinstance(provided_signature, str) or not provided_signature:
        return False
    expected = compute_webhook_signature(raw_body, secret_key)
    return hmac.compare_digest(expected.encode("ascii"), provided_signature.encode("utf-8"))


class WebhookVerifier:
    """Verificador de webhooks com chave imutável.

    Args:
        secret_key: PK_WEBHOOK_SECRET_KEY
        mode: "raw" (bytes recebidos) ou "reserialized" (JSON minificado
            do body parseado, compatível com o comportamento legado)
    """

    def __init__(self, secret_key: str, mode: SignatureMode = "raw") -> None:
        if not secret_key:
            raise ConfigurationError("PK_WEBHOOK_SECRET_KEY é obrigatório para verificar webhooks")
        if mode not in SIGNATURE_MODES:
            raise ConfigurationError(f"modo de assinatura inválido: {mode}")
        self._secret_key = secret_key
        self._mode = mode

    @property
    def mode(self) -> SignatureMode:
        return self._mode

    def _signable(self, raw_body: bytes | str) -> bytes:
        if self._mode == "raw":
            return _as_bytes(raw_body)
        try:
            return minify_json(json.loads(raw_body)).encode("utf-8")
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _as_bytes(raw_body)

    def verify(self, raw_body: bytes | str, provided_signature: object) -> bool:
        return verify_webhook_signature(self._signable(raw_body), provided_signature, self._secret_key)

    def verify_request(self, raw_body: bytes | str, headers: Mapping[str, str]) -> None:
        """Autentica um webhook recebido.

        Raises:
            MissingSignatureError: Header ausente ou vazio
            SignatureMismatchError: Assinatura divergente
        """
        signature = _get_header(headers, WEBHOOK_SIGNATURE_HEADER)
        if not signature:
            raise MissingSignatureError("missing_signature")

        if not self.verify(raw_body, signature):
            logger.warning(
                "webhook_signature_mismatch",
                extra={"received_prefix": signature[:10], "mode": self._mode},
            )
            raise SignatureMismatchError("signature_mismatch")


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None
