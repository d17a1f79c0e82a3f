"""Parse e validação do webhook PayKaduna (sem PII).

Ordem: assinatura primeiro, depois JSON e estrutura do evento.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ..models import WebhookEvent

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .verify import WebhookVerifier


class WebhookPayloadError(ValueError):
    """Payload autenticado mas inválido."""


class InvalidJsonError(WebhookPayloadError):
    """JSON inválido no payload do webhook."""


class InvalidPayloadError(WebhookPayloadError):
    """Estrutura do evento inválida (event, data, message)."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    verifier: WebhookVerifier,
) -> WebhookEvent:
    """Autentica e parseia um webhook.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        verifier: Verificador configurado com PK_WEBHOOK_SECRET_KEY

    Raises:
        MissingSignatureError | SignatureMismatchError: Falha de autenticação
        InvalidJsonError: JSON inválido
        InvalidPayloadError: Estrutura do evento inválida

    Returns:
        WebhookEvent validado
    """
    verifier.verify_request(raw_body, headers)

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    event = payload.get("event")
    if not isinstance(event, str) or not event:
        raise InvalidPayloadError("Invalid request: event is required and must be a string")

    data = payload.get("data")
    if not isinstance(data, dict):
        raise InvalidPayloadError("Invalid request: data is required and must be an object")

    message = payload.get("message")
    if not isinstance(message, str) or not message:
        raise InvalidPayloadError("Invalid request: message is required and must be a string")

    return WebhookEvent(event=event, data=data, message=message)
