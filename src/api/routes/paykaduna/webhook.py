"""Endpoint de webhook do PayKaduna.

Endpoint:
- POST /api/v1/paykaduna/webhook: recebimento de eventos (pagamento, fatura)

Fluxo:
1. Valida HMAC-SHA512 (x-paykaduna-signature) sobre o body bruto
2. Valida estrutura do evento (event, data, message)
3. Atualiza o espelho local do bill (falhas não alteram a resposta)

Respostas seguem o envelope do provedor: {"event", "data", "message"}.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.connectors.paykaduna.webhook import (
    InvalidJsonError,
    InvalidPayloadError,
    MissingSignatureError,
    SignatureMismatchError,
    WebhookVerifier,
    parse_webhook_request,
)
from app.bootstrap.dependencies import get_webhook_use_case, get_webhook_verifier
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    record_webhook_outcome,
    reset_correlation_id,
    set_correlation_id,
)
from app.use_cases.paykaduna import ProcessWebhookEventUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_EVENT = "webhook.error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"event": ERROR_EVENT, "data": {}, "message": message},
    )


@router.post("/webhook", response_model=None)
async def receive_webhook(
    request: Request,
    verifier: WebhookVerifier = Depends(get_webhook_verifier),
    use_case: ProcessWebhookEventUseCase = Depends(get_webhook_use_case),
) -> JSONResponse:
    """Recebe eventos do PayKaduna.

    Returns:
        200 com o evento processado, 401 para assinatura ausente/inválida,
        400 para payload inválido, 500 para falha inesperada.
    """
    token = set_correlation_id(
        correlation_id_from_headers(request.headers) or get_correlation_id() or None
    )
    try:
        raw_body = await request.body()
        headers: dict[str, Any] = dict(request.headers)

        try:
            webhook_event = parse_webhook_request(raw_body, headers, verifier)
        except MissingSignatureError:
            logger.warning("webhook_missing_signature", extra={"channel": "paykaduna"})
            record_webhook_outcome("rejected", "missing_signature", get_correlation_id())
            return _error(status.HTTP_401_UNAUTHORIZED, "Webhook signature is required")
        except SignatureMismatchError:
            record_webhook_outcome("rejected", "signature_mismatch", get_correlation_id())
            return _error(status.HTTP_401_UNAUTHORIZED, "Webhook signature validation failed")
        except InvalidJsonError:
            record_webhook_outcome("rejected", "invalid_json", get_correlation_id())
            return _error(
                status.HTTP_400_BAD_REQUEST,
                "Invalid request: body must be a JSON object",
            )
        except InvalidPayloadError as exc:
            record_webhook_outcome("rejected", "invalid_payload", get_correlation_id())
            return _error(status.HTTP_400_BAD_REQUEST, str(exc))

        logger.info(
            "webhook_received",
            extra={
                "channel": "paykaduna",
                "event": webhook_event.event,
                "bill_reference": webhook_event.bill_reference,
                "has_invoice_no": webhook_event.has_invoice_no,
            },
        )

        result = await use_case.execute(webhook_event.event, webhook_event.data)
        record_webhook_outcome(
            "processed",
            "mirrored" if result.mirrored else "not_mirrored",
            get_correlation_id(),
        )

        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "event": webhook_event.event,
                "data": webhook_event.data,
                "message": "Webhook event processed successfully",
            },
        )
    except Exception as exc:
        logger.exception(
            "webhook_processing_failed",
            extra={"channel": "paykaduna", "error_type": type(exc).__name__},
        )
        record_webhook_outcome("failed", type(exc).__name__, get_correlation_id())
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    finally:
        reset_correlation_id(token)
