"""Erros do conector PayKaduna (sem dados sensíveis).

Hierarquia:
- ConfigurationError: secret ausente/vazio (fatal, nunca retentado)
- NetworkError: sem resposta (conexão, timeout) — retentável
- UpstreamError: resposta não-2xx do provedor
  - ClientError: 4xx — não retentável
  - ServerError: 5xx — retentável
"""

from __future__ import annotations

from typing import Any


class PayKadunaError(Exception):
    """Base para falhas do conector PayKaduna."""


class ConfigurationError(PayKadunaError):
    """Configuração obrigatória ausente (ex: chave de assinatura vazia)."""


class NetworkError(PayKadunaError):
    """Nenhuma resposta recebida do provedor (conexão ou timeout)."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class UpstreamError(PayKadunaError):
    """Resposta não-2xx do provedor.

    Attributes:
        status_code: Status HTTP retornado
        body: Corpo decodificado (JSON, texto ou None)
    """

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def upstream_message(self) -> str | None:
        """Campo `message` do corpo de erro, quando presente."""
        if isinstance(self.body, dict):
            message = self.body.get("message")
            if isinstance(message, str) and message:
                return message
        return None


class ClientError(UpstreamError):
    """Erro 4xx do provedor."""


class ServerError(UpstreamError):
    """Erro 5xx do provedor."""


def error_from_response(status_code: int, body: Any = None) -> UpstreamError:
    """Constrói o erro tipado correspondente ao status HTTP."""
    if 400 <= status_code < 500:
        return ClientError("paykaduna_client_error", status_code=status_code, body=body)
    if status_code >= 500:
        return ServerError("paykaduna_server_error", status_code=status_code, body=body)
    return UpstreamError("paykaduna_unexpected_status", status_code=status_code, body=body)
