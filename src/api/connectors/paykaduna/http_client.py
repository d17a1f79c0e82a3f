"""Cliente HTTP assinado para a API PayKaduna.

`execute` realiza exatamente uma chamada de rede (sem retry);
`request` envolve `execute` na política de retry.

Os bytes enviados são exatamente os bytes assinados:
- GET/DELETE: URL = base_url + path + query assinada
- POST/PUT/PATCH: body = JSON minificado assinado
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from app.observability import get_correlation_id, record_latency

from .errors import NetworkError, error_from_response
from .retry import (
    DEFAULT_BACKOFF_BASE_MS,
    DEFAULT_BACKOFF_MAX_MS,
    DEFAULT_MAX_RETRIES,
    execute_with_retry,
)
from .signing import OutboundRequest, RequestSigner, build_signable_payload

if TYPE_CHECKING:
    from config.settings import PayKadunaSettings

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS
    backoff_max_ms: int = DEFAULT_BACKOFF_MAX_MS
    default_headers: dict[str, str] = field(default_factory=dict)


class PayKadunaHttpClient:
    """Executor de chamadas assinadas ao PayKaduna."""

    def __init__(
        self,
        base_url: str,
        signer: RequestSigner,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._signer = signer
        self._config = config or HttpClientConfig()
        self._transport = transport

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def request(self, request: OutboundRequest) -> Any:
        """Executa a chamada com retry e backoff."""
        return await execute_with_retry(
            lambda: self.execute(request),
            self._config.max_retries,
            backoff_base_ms=self._config.backoff_base_ms,
            backoff_max_ms=self._config.backoff_max_ms,
        )

    async def execute(self, request: OutboundRequest) -> Any:
        """Executa uma única tentativa.

        Returns:
            Corpo decodificado (JSON, texto ou None)

        Raises:
            NetworkError: Sem resposta (conexão/timeout)
            ClientError | ServerError | UpstreamError: Status não-2xx
        """
        payload = build_signable_payload(request)
        headers = {
            **self._config.default_headers,
            "Content-Type": "application/json",
            **self._signer.signed_headers(request),
        }
        if request.uses_query:
            url = f"{self._base_url}{payload}"
            content = None
        else:
            url = f"{self._base_url}{request.path}"
            content = payload.encode("utf-8")

        started_at = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    request.method,
                    url,
                    content=content,
                    headers=headers,
                )
        except httpx.TransportError as exc:
            logger.warning(
                "paykaduna_network_error",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "error_type": type(exc).__name__,
                },
            )
            raise NetworkError("paykaduna_network_error", cause=exc) from exc

        latency_ms = (time.perf_counter() - started_at) * 1000
        record_latency("paykaduna", f"{request.method} {request.path}", latency_ms, get_correlation_id())

        body = _decode_body(response)
        if not response.is_success:
            logger.warning(
                "paykaduna_upstream_error",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "status_code": response.status_code,
                },
            )
            raise error_from_response(response.status_code, body)

        logger.debug(
            "paykaduna_call_success",
            extra={
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
            },
        )
        return body


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def create_paykaduna_client(
    settings: PayKadunaSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PayKadunaHttpClient:
    """Factory para criar cliente PayKaduna com config padrão.

    Args:
        settings: PayKadunaSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx opcional (testes)

    Raises:
        ConfigurationError: Se PK_API_KEY estiver vazio

    Returns:
        Cliente HTTP assinado e configurado.
    """
    # Import local para evitar dependência circular
    from config.settings import get_paykaduna_settings

    paykaduna = settings or get_paykaduna_settings()
    config = HttpClientConfig(
        timeout_seconds=paykaduna.request_timeout_seconds,
        max_retries=paykaduna.max_retries,
    )
    return PayKadunaHttpClient(
        base_url=paykaduna.base_url,
        signer=RequestSigner(paykaduna.api_key),
        config=config,
        transport=transport,
    )
