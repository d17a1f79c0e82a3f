"""Endpoints de pagamento e configuração.

Endpoints:
- POST /v1/payments/initialize: cria transação e retorna checkoutUrl
- PUT /v1/configuration/redirect-url?redirectUrl=...: atualiza URL de retorno
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from api.connectors.paykaduna import PayKadunaService
from api.routes.paykaduna.schemas import InitPaymentRequest
from app.bootstrap.dependencies import get_paykaduna_service

logger = logging.getLogger(__name__)

URL_PATTERN = r"^[A-Za-z][A-Za-z0-9+.-]*://\S+$"

payments_router = APIRouter()
configuration_router = APIRouter()


@payments_router.post("/initialize")
async def initialize_payment(
    body: InitPaymentRequest,
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> dict[str, Any]:
    result = await service.create_es_transaction(body.to_payload())
    logger.info("payment_initialized", extra={"bill_reference": body.billReference})
    return result


@configuration_router.put("/redirect-url")
async def update_redirect_url(
    redirect_url: str = Query(..., alias="redirectUrl", pattern=URL_PATTERN),
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> Any:
    result = await service.update_payment_redirect_url(redirect_url)
    logger.info("redirect_url_updated", extra={"redirect_url": redirect_url})
    return result
