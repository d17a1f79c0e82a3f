"""Webhook PayKaduna — verificação de assinatura e parse do evento."""

from .receive import (
    InvalidJsonError,
    InvalidPayloadError,
    WebhookPayloadError,
    parse_webhook_request,
)
from .verify import (
    WEBHOOK_SIGNATURE_HEADER,
    MissingSignatureError,
    SignatureMismatchError,
    WebhookVerificationError,
    WebhookVerifier,
    compute_webhook_signature,
    verify_webhook_signature,
)

__all__ = [
    "WEBHOOK_SIGNATURE_HEADER",
    "InvalidJsonError",
    "InvalidPayloadError",
    "MissingSignatureError",
    "SignatureMismatchError",
    "WebhookPayloadError",
    "WebhookVerificationError",
    "WebhookVerifier",
    "compute_webhook_signature",
    "parse_webhook_request",
    "verify_webhook_signature",
]
