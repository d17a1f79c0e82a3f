"""Espelhamento de bills do PayKaduna no store local.

Recebe respostas do provedor (criação, consulta) e eventos de webhook
e mantém o BillRecord correspondente atualizado.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain.bill import BillItemRecord, BillRecord

if TYPE_CHECKING:
    from app.protocols.bill_store import BillStoreProtocol

logger = logging.getLogger(__name__)

PAYMENT_SUCCESS_EVENTS = frozenset({"charge.success", "payment.success"})


def _has_bill(response: Any) -> bool:
    return (
        isinstance(response, dict)
        and isinstance(response.get("bill"), dict)
        and isinstance(response.get("billItems"), list)
    )


class BillMirrorService:
    """Mantém o espelho local de bills."""

    def __init__(self, store: BillStoreProtocol) -> None:
        self._store = store

    async def upsert_bill(
        self,
        bill: dict[str, Any],
        bill_items: list[dict[str, Any]],
        **overrides: Any,
    ) -> BillRecord:
        """Cria ou atualiza um bill substituindo todos os itens.

        Campos em `overrides` (invoice_no, invoice_url, metadata, head,
        subhead, paid_at, last_event) só sobrescrevem quando informados;
        invoice_no, invoice_url e metadata ausentes preservam o valor atual.
        """
        incoming = BillRecord.model_validate(bill)
        existing = await self._store.get(incoming.bill_reference)

        record = incoming.model_copy(
            update={
                "items": [BillItemRecord.model_validate(item) for item in bill_items],
                "invoice_no": existing.invoice_no if existing else None,
                "invoice_url": existing.invoice_url if existing else None,
                "metadata": existing.metadata if existing else None,
                "last_event": existing.last_event if existing else None,
                "updated_at": datetime.now(UTC),
            }
        )
        updates = {key: value for key, value in overrides.items() if value is not None}
        if updates:
            record = record.model_copy(update=updates)

        await self._store.upsert(record)
        return record

    async def save_from_create_response(self, response: Any) -> BillRecord | None:
        """Espelha a resposta de CreateESBill/CreateBulkESBill."""
        if not _has_bill(response):
            return None
        return await self.upsert_bill(response["bill"], response["billItems"])

    async def save_from_get_response(
        self,
        response: Any,
        invoice_url: str | None = None,
    ) -> BillRecord | None:
        """Espelha a resposta de GetBill (com invoice URL quando disponível)."""
        if not _has_bill(response):
            return None
        return await self.upsert_bill(
            response["bill"],
            response["billItems"],
            invoice_url=invoice_url,
        )

    async def update_from_webhook(
        self,
        bill_reference: str,
        webhook_data: dict[str, Any],
        api_bill_data: Any = None,
        event_type: str | None = None,
    ) -> BillRecord | None:
        """Aplica um evento de webhook ao bill espelhado.

        Com dados completos do provedor faz upsert; sem eles aplica apenas
        os campos presentes no webhook a um bill já conhecido.

        Returns:
            BillRecord atualizado ou None se o bill não é conhecido.
        """
        is_payment_success = event_type in PAYMENT_SUCCESS_EVENTS
        paid_at = datetime.now(UTC) if is_payment_success else None
        head = webhook_data.get("head")
        subhead = webhook_data.get("subhead")

        if _has_bill(api_bill_data):
            return await self.upsert_bill(
                api_bill_data["bill"],
                api_bill_data["billItems"],
                invoice_no=webhook_data.get("invoiceNo"),
                metadata=webhook_data,
                head=head,
                subhead=subhead,
                paid_at=paid_at,
                last_event=event_type,
            )

        existing = await self._store.get(bill_reference)
        if existing is None:
            logger.warning(
                "bill_mirror_unknown_reference",
                extra={"bill_reference": bill_reference, "event": event_type},
            )
            return None

        updates: dict[str, Any] = {
            "metadata": webhook_data,
            "updated_at": datetime.now(UTC),
            "last_event": event_type,
        }
        if webhook_data.get("payStatus"):
            updates["pay_status"] = str(webhook_data["payStatus"])
        # `status` do webhook prevalece sobre payStatus
        if webhook_data.get("status"):
            updates["pay_status"] = str(webhook_data["status"])
        if webhook_data.get("invoiceNo"):
            updates["invoice_no"] = str(webhook_data["invoiceNo"])
        if paid_at is not None:
            updates["paid_at"] = paid_at
        if head is not None:
            updates["head"] = head
        if subhead is not None:
            updates["subhead"] = subhead

        record = existing.model_copy(update=updates)
        await self._store.upsert(record)

        logger.info(
            "bill_updated_from_webhook",
            extra={
                "bill_reference": bill_reference,
                "has_full_data": False,
                "is_payment_success": is_payment_success,
            },
        )
        return record
