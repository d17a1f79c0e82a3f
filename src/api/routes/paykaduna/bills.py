"""Endpoints de bills (ESBills).

Endpoints:
- POST /v1/bills: cria bill
- POST /v1/bills/bulk: cria bills em lote (207 com falhas parciais)
- GET /v1/bills/{reference}: consulta bill
- GET /v1/bills/{reference}/invoice-url: URL da fatura
- POST /v1/bills/{reference}/metadata: anexa dados adicionais
- POST /v1/bills/metadata/bulk: anexa dados adicionais em lote

O espelho local é atualizado após criação/consulta; falhas no espelho
são logadas e nunca alteram a resposta.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from api.connectors.paykaduna import PayKadunaError, PayKadunaService
from api.routes.paykaduna.schemas import (
    AttachDataItem,
    BulkAttachDataRequest,
    BulkBillRequest,
    CreateBillRequest,
)
from app.bootstrap.dependencies import get_bill_mirror, get_paykaduna_service
from app.services.bill_mirror import BillMirrorService

logger = logging.getLogger(__name__)

router = APIRouter()


def _bill_reference(result: Any) -> str | None:
    if isinstance(result, dict) and isinstance(result.get("bill"), dict):
        return result["bill"].get("billReference")
    return None


async def _mirror_create_response(mirror: BillMirrorService, result: Any) -> None:
    try:
        await mirror.save_from_create_response(result)
    except Exception as exc:
        logger.error(
            "bill_mirror_save_failed",
            extra={"bill_reference": _bill_reference(result), "error_type": type(exc).__name__},
        )


@router.post("")
async def create_bill(
    body: CreateBillRequest,
    service: PayKadunaService = Depends(get_paykaduna_service),
    mirror: BillMirrorService = Depends(get_bill_mirror),
) -> Any:
    result = await service.create_es_bill(body.to_payload())
    await _mirror_create_response(mirror, result)
    logger.info("bill_created", extra={"bill_reference": _bill_reference(result)})
    return result


@router.post("/bulk", response_model=None)
async def create_bulk_bills(
    body: BulkBillRequest,
    service: PayKadunaService = Depends(get_paykaduna_service),
    mirror: BillMirrorService = Depends(get_bill_mirror),
) -> JSONResponse:
    """Cria bills em lote; responde 207 se houver itens com falha."""
    result = await service.create_bulk_es_bill(body.to_payload())
    await _mirror_create_response(mirror, result)

    failed = result.get("failedBillItems") if isinstance(result, dict) else None
    if failed:
        logger.warning(
            "bulk_bills_partial_failure",
            extra={"total_bills": len(body.esBillDtos), "failed_items": len(failed)},
        )
        return JSONResponse(status_code=207, content=result)

    logger.info("bulk_bills_created", extra={"total_bills": len(body.esBillDtos)})
    return JSONResponse(status_code=200, content=result)


@router.post("/metadata/bulk")
async def bulk_attach_metadata(
    body: BulkAttachDataRequest,
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> Any:
    result = await service.bulk_attach_additional_data_to_bill(body.to_payload())
    logger.info("bulk_metadata_attached", extra={"bill_count": len(body.bills)})
    return result


@router.get("/{reference}")
async def get_bill(
    reference: str,
    service: PayKadunaService = Depends(get_paykaduna_service),
    mirror: BillMirrorService = Depends(get_bill_mirror),
) -> Any:
    """Consulta o bill e atualiza o espelho (invoice URL é opcional)."""
    bill = await service.get_bill(reference)

    if _bill_reference(bill) is not None:
        invoice_url: str | None = None
        try:
            invoice = await service.get_invoice_url(reference)
            if isinstance(invoice, dict):
                invoice_url = invoice.get("invoiceUrl")
        except PayKadunaError:
            logger.debug("invoice_url_unavailable", extra={"bill_reference": reference})

        try:
            await mirror.save_from_get_response(bill, invoice_url=invoice_url)
        except Exception as exc:
            logger.error(
                "bill_mirror_save_failed",
                extra={"bill_reference": reference, "error_type": type(exc).__name__},
            )

    logger.info("bill_retrieved", extra={"bill_reference": reference})
    return bill


@router.get("/{reference}/invoice-url")
async def get_invoice_url(
    reference: str,
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> Any:
    result = await service.get_invoice_url(reference)
    logger.info("invoice_url_retrieved", extra={"bill_reference": reference})
    return result


@router.post("/{reference}/metadata")
async def attach_metadata(
    reference: str,
    body: dict[str, Any] = Body(...),
    service: PayKadunaService = Depends(get_paykaduna_service),
) -> Any:
    """Anexa dados adicionais; aceita `{"additionalData": {...}}` ou o objeto direto."""
    item = AttachDataItem.model_validate(
        {
            "billReference": reference,
            "additionalData": body.get("additionalData") or body,
        }
    )
    result = await service.attach_additional_data_to_bill(item.to_payload())
    logger.info("metadata_attached", extra={"bill_reference": reference})
    return result
