"""Política de retry com backoff exponencial para chamadas ao PayKaduna.

Classificação de falhas:
- Sem resposta (conexão, timeout): retentável
- 4xx: não retentável, propaga imediatamente
- 5xx: retentável

Tentativas numeradas 0..max_retries (até max_retries + 1 chamadas).
Backoff: min(base * 2^n, max) → 1s, 2s, 4s, limitado a 10s.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from .errors import ClientError, NetworkError, ServerError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_BASE_MS = 1000
DEFAULT_BACKOFF_MAX_MS = 10_000


class FailureKind(str, Enum):
    """Classificação de uma tentativa falha."""

    NETWORK_OR_TIMEOUT = "network_or_timeout"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class ClassifiedFailure:
    kind: FailureKind
    status_code: int | None = None

    @property
    def retryable(self) -> bool:
        return self.kind is not FailureKind.CLIENT_ERROR


@dataclass(frozen=True)
class RetryAttempt:
    """Estado de uma tentativa (descartado ao fim da chamada)."""

    attempt_number: int
    delay_before_ms: int = 0


def classify_failure(exc: BaseException) -> ClassifiedFailure | None:
    """Classifica a exceção; None se não pertence à taxonomia do conector."""
    if isinstance(exc, NetworkError):
        return ClassifiedFailure(FailureKind.NETWORK_OR_TIMEOUT)
    if isinstance(exc, ClientError):
        return ClassifiedFailure(FailureKind.CLIENT_ERROR, exc.status_code)
    if isinstance(exc, ServerError):
        return ClassifiedFailure(FailureKind.SERVER_ERROR, exc.status_code)
    return None


def is_retryable(exc: BaseException) -> bool:
    failure = classify_failure(exc)
    return failure is not None and failure.retryable


def calculate_backoff_ms(
    attempt: int,
    base_ms: int = DEFAULT_BACKOFF_BASE_MS,
    max_ms: int = DEFAULT_BACKOFF_MAX_MS,
) -> int:
    """Delay antes da tentativa seguinte à tentativa `attempt` (0-indexada)."""
    return min(base_ms * (2**attempt), max_ms)


async def execute_with_retry(
    attempt_fn: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    *,
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS,
    backoff_max_ms: int = DEFAULT_BACKOFF_MAX_MS,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Executa `attempt_fn` com retry sequencial e backoff.

    A exceção original propaga sem alteração quando a falha não é
    retentável ou quando a última tentativa falha.

    Args:
        attempt_fn: Fábrica de uma tentativa (uma chamada de rede)
        max_retries: Número máximo de retries após a primeira tentativa
        backoff_base_ms: Delay base em ms
        backoff_max_ms: Teto do delay em ms
        sleep: Espera cooperativa (injetável em testes)

    Returns:
        Resultado da primeira tentativa bem-sucedida.
    """
    if max_retries < 0:
        raise ValueError("max_retries deve ser >= 0")

    attempt = RetryAttempt(attempt_number=0)
    while True:
        try:
            return await attempt_fn()
        except Exception as exc:
            failure = classify_failure(exc)
            if failure is None or not failure.retryable:
                raise
            if attempt.attempt_number >= max_retries:
                logger.warning(
                    "paykaduna_retry_exhausted",
                    extra={
                        "attempts": attempt.attempt_number + 1,
                        "failure_kind": failure.kind.value,
                        "status_code": failure.status_code,
                    },
                )
                raise

            delay_ms = calculate_backoff_ms(
                attempt.attempt_number, backoff_base_ms, backoff_max_ms
            )
            logger.info(
                "paykaduna_retry_scheduled",
                extra={
                    "attempt": attempt.attempt_number,
                    "failure_kind": failure.kind.value,
                    "status_code": failure.status_code,
                    "backoff_ms": delay_ms,
                },
            )
            await sleep(delay_ms / 1000)
            attempt = RetryAttempt(
                attempt_number=attempt.attempt_number + 1,
                delay_before_ms=delay_ms,
            )
