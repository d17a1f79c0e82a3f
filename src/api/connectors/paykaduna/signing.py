"""Assinatura HMAC-SHA256 das requisições enviadas ao PayKaduna.

Regra do provedor:
- GET/DELETE: assina path + query string (ex: /api/ESBills/GetBill?billreference=12345)
- POST/PUT/PATCH: assina o JSON minificado do body (sem espaços)

A assinatura é verificada byte a byte pelo provedor, portanto o payload
assinado precisa ser exatamente o que é enviado no fio.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import ConfigurationError

SIGNATURE_HEADER = "X-Api-Signature"

QUERY_METHODS = frozenset({"GET", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

# Caracteres preservados pelo serializer application/x-www-form-urlencoded
_FORM_SAFE = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789*-._"
)


@dataclass(frozen=True)
class OutboundRequest:
    """Descritor de uma chamada ao provedor.

    Attributes:
        method: GET, DELETE, POST, PUT ou PATCH
        path: Path do endpoint (ex: /api/ESBills/GetBill)
        query: Parâmetros de query em ordem de inserção (GET/DELETE)
        body: Valor JSON ou string JSON (POST/PUT/PATCH)
    """

    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: Any = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in QUERY_METHODS | BODY_METHODS:
            raise ValueError(f"método HTTP não suportado: {self.method}")
        object.__setattr__(self, "method", method)

    @property
    def uses_query(self) -> bool:
        return self.method in QUERY_METHODS


def encode_query(query: Mapping[str, str]) -> str:
    """Serializa a query no formato application/x-www-form-urlencoded."""
    return "&".join(
        f"{_form_encode(str(key))}={_form_encode(str(value))}"
        for key, value in query.items()
    )


def _form_encode(value: str) -> str:
    parts: list[str] = []
    for char in value:
        if char in _FORM_SAFE:
            parts.append(char)
        elif char == " ":
            parts.append("+")
        else:
            parts.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
    return "".join(parts)


def minify_json(value: Any) -> str:
    """Serializa JSON sem espaços, preservando a ordem das chaves."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_signable_payload(request: OutboundRequest) -> str:
    """Deriva o payload assinável de forma determinística.

    Args:
        request: Descritor da chamada

    Returns:
        path+query (GET/DELETE) ou JSON minificado do body (escrita)
    """
    if request.uses_query:
        if not request.query:
            return request.path
        return f"{request.path}?{encode_query(request.query)}"

    body = request.body
    if body is None:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    if isinstance(body, str):
        # String JSON pode vir com espaços; re-serializa para garantir minificação
        try:
            return minify_json(json.loads(body))
        except json.JSONDecodeError:
            return body
    return minify_json(body)


def generate_hmac_signature(payload: str, secret: str) -> str:
    """HMAC-SHA256 do payload, codificado em base64 (44 caracteres)."""
    digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(request: OutboundRequest, secret_key: str) -> str:
    """Calcula a assinatura de uma requisição.

    Raises:
        ConfigurationError: Se secret_key estiver vazio
    """
    if not secret_key:
        raise ConfigurationError("PK_API_KEY é obrigatório para assinar requisições")
    return generate_hmac_signature(build_signable_payload(request), secret_key)


class RequestSigner:
    """Assinador com chave imutável definida na construção."""

    def __init__(self, secret_key: str) -> None:
        if not secret_key:
            raise ConfigurationError("PK_API_KEY é obrigatório para assinar requisições")
        self._secret_key = secret_key

    def sign(self, request: OutboundRequest) -> str:
        return sign_request(request, self._secret_key)

    def signed_headers(self, request: OutboundRequest) -> dict[str, str]:
        """Header de assinatura a anexar na requisição."""
        return {SIGNATURE_HEADER: self.sign(request)}
