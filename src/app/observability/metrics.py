"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente pelo backend de logs.

Métricas suportadas:
- Latência: histogram de tempos de chamadas ao provedor
- Webhook: counter de webhooks aceitos/rejeitados com motivo

Uso:
    from app.observability.metrics import record_latency, record_webhook_outcome

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("paykaduna", "GET /api/ESBills/GetBill", latency_ms, correlation_id)

    record_webhook_outcome("rejected", reason="signature_mismatch")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "paykaduna")
        operation: Nome da operação (ex: "POST /api/ESBills/CreateESBill")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_webhook_outcome(
    outcome: str,
    reason: str | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de um webhook recebido.

    Args:
        outcome: "processed", "rejected" ou "failed"
        reason: Motivo da rejeição (ex: "missing_signature") — sem PII
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_webhook",
        extra={
            "metric_type": "counter",
            "outcome": outcome,
            "reason": reason,
            "correlation_id": correlation_id,
        },
    )
