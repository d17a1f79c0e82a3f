"""Conector PayKaduna — adapter de borda para a API PayKaduna IBS.

Este módulo é o único ponto de IO com o provedor.
Responsabilidades:
- Assinatura HMAC-SHA256 das requisições de saída (X-Api-Signature)
- Execução HTTP com timeout e classificação de falhas
- Retry com backoff exponencial
- Verificação HMAC-SHA512 dos webhooks recebidos
- Operações de bills, taxpayers e pagamentos
"""

from .errors import (
    ClientError,
    ConfigurationError,
    NetworkError,
    PayKadunaError,
    ServerError,
    UpstreamError,
)
from .http_client import HttpClientConfig, PayKadunaHttpClient, create_paykaduna_client
from .models import WebhookEvent
from .retry import (
    ClassifiedFailure,
    FailureKind,
    calculate_backoff_ms,
    classify_failure,
    execute_with_retry,
    is_retryable,
)
from .service import PayKadunaService
from .signing import (
    SIGNATURE_HEADER,
    OutboundRequest,
    RequestSigner,
    build_signable_payload,
    generate_hmac_signature,
    sign_request,
)

__all__ = [
    "SIGNATURE_HEADER",
    "ClassifiedFailure",
    "ClientError",
    "ConfigurationError",
    "FailureKind",
    "HttpClientConfig",
    "NetworkError",
    "OutboundRequest",
    "PayKadunaError",
    "PayKadunaHttpClient",
    "PayKadunaService",
    "RequestSigner",
    "ServerError",
    "UpstreamError",
    "WebhookEvent",
    "build_signable_payload",
    "calculate_backoff_ms",
    "classify_failure",
    "create_paykaduna_client",
    "execute_with_retry",
    "generate_hmac_signature",
    "is_retryable",
    "sign_request",
]
