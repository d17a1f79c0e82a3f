"""Observabilidade — correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_webhook_outcome
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_webhook_outcome,
)

__all__ = [
    "CORRELATION_HEADER",
    "correlation_id_from_headers",
    "get_correlation_id",
    "record_latency",
    "record_webhook_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
