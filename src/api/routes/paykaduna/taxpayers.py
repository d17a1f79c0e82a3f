"""Endpoints de taxpayers.

Endpoints:
- POST /v1/taxpayers: registra taxpayer (201)
- GET /v1/taxpayers/search?term=...: busca por TIN, telefone, e-mail ou TPUI
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from api.connectors.paykaduna import PayKadunaService
from api.routes.paykaduna.schemas import RegisterTaxpayerRequest
from app.bootstrap.dependencies import get_paykaduna_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=201)
async def register_taxpayer(
    body: RegisterTaxpayerRequest,
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> Any:
    result = await service.register_taxpayer(body.to_payload())
    logger.info(
        "taxpayer_registered",
        extra={"identifier": body.identifier, "user_type": body.userType},
    )
    return result


@router.get("/search")
async def search_taxpayer(
    term: str = Query(..., min_length=4),
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> Any:
    taxpayers = await service.search_taxpayer(term)
    result_count = len(taxpayers) if isinstance(taxpayers, list) else 0
    logger.info("taxpayer_search_completed", extra={"result_count": result_count})
    return taxpayers or []
