"""Testes do espelhamento de bills."""

from __future__ import annotations

import pytest

from app.infra.stores import MemoryBillStore
from app.services.bill_mirror import BillMirrorService
from tests.fakes.paykaduna import bill_response


@pytest.fixture
def store() -> MemoryBillStore:
    return MemoryBillStore()


@pytest.fixture
def mirror(store: MemoryBillStore) -> BillMirrorService:
    return BillMirrorService(store)


@pytest.mark.asyncio
async def test_save_from_create_response(mirror: BillMirrorService) -> None:
    record = await mirror.save_from_create_response(bill_response("B1"))

    assert record is not None
    assert record.bill_reference == "B1"
    assert record.pay_status == "Pending"
    assert record.items[0].amount == 1500.0
    assert record.updated_at is not None


@pytest.mark.asyncio
async def test_responses_without_bill_are_ignored(
    mirror: BillMirrorService,
    store: MemoryBillStore,
) -> None:
    assert await mirror.save_from_create_response({"failedBillItems": []}) is None
    assert await mirror.save_from_get_response("not a dict") is None
    assert len(store) == 0


@pytest.mark.asyncio
async def test_upsert_preserves_invoice_and_metadata(mirror: BillMirrorService) -> None:
    await mirror.save_from_get_response(bill_response("B1"), invoice_url="https://inv.test/B1")
    await mirror.update_from_webhook("B1", {"invoiceNo": "INV1"}, event_type="invoice.created")

    record = await mirror.save_from_create_response(bill_response("B1", pay_status="Paid"))

    assert record is not None
    assert record.pay_status == "Paid"
    assert record.invoice_url == "https://inv.test/B1"
    assert record.invoice_no == "INV1"
    assert record.metadata == {"invoiceNo": "INV1"}
    assert record.last_event == "invoice.created"


@pytest.mark.asyncio
async def test_webhook_with_api_data_upserts(mirror: BillMirrorService) -> None:
    record = await mirror.update_from_webhook(
        "B1",
        {"billReference": "B1", "invoiceNo": "INV1", "head": "Land", "subhead": "Tenement"},
        api_bill_data=bill_response("B1", pay_status="Paid"),
        event_type="charge.success",
    )

    assert record is not None
    assert record.pay_status == "Paid"
    assert record.invoice_no == "INV1"
    assert record.head == "Land"
    assert record.subhead == "Tenement"
    assert record.paid_at is not None
    assert record.last_event == "charge.success"


@pytest.mark.asyncio
async def test_partial_webhook_update_on_known_bill(mirror: BillMirrorService) -> None:
    await mirror.save_from_create_response(bill_response("B1"))

    record = await mirror.update_from_webhook(
        "B1",
        {"payStatus": "PartPaid", "status": "Paid", "invoiceNo": "INV2"},
        event_type="payment.success",
    )

    assert record is not None
    assert record.pay_status == "Paid"
    assert record.invoice_no == "INV2"
    assert record.paid_at is not None
    assert record.items[0].revenue_head == "Tenement rate"


@pytest.mark.asyncio
async def test_non_payment_event_does_not_set_paid_at(mirror: BillMirrorService) -> None:
    await mirror.save_from_create_response(bill_response("B1"))

    record = await mirror.update_from_webhook("B1", {"payStatus": "Pending"}, event_type="invoice.created")

    assert record is not None
    assert record.paid_at is None


@pytest.mark.asyncio
async def test_partial_webhook_for_unknown_bill_is_skipped(
    mirror: BillMirrorService,
    store: MemoryBillStore,
) -> None:
    record = await mirror.update_from_webhook("UNKNOWN", {"status": "Paid"}, event_type="charge.success")

    assert record is None
    assert len(store) == 0
