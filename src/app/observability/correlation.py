"""correlation_id por request, propagado para os logs via ContextVar.

Origem do valor, em ordem: header `x-correlation-id`, header
`x-request-id`, UUID v4 novo. O mesmo valor volta no header de resposta.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

CORRELATION_HEADER = "x-correlation-id"
REQUEST_ID_HEADER = "x-request-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """correlation_id do contexto atual ("" fora de um request)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera um UUID se vazio.

    Returns:
        Token para reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Extrai o correlation_id enviado pelo cliente, se houver."""
    for name in (CORRELATION_HEADER, REQUEST_ID_HEADER):
        value = headers.get(name)
        if value and value.strip():
            return value.strip()
    return None
