"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.bill_store import BillStoreProtocol

if TYPE_CHECKING:
    from app.domain.bill import BillRecord


class MemoryBillStore(BillStoreProtocol):
    """Espelho de bills em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._store: dict[str, BillRecord] = {}  # bill_reference -> record

    async def get(self, bill_reference: str) -> BillRecord | None:
        record = self._store.get(bill_reference)
        return record.model_copy(deep=True) if record is not None else None

    async def upsert(self, record: BillRecord) -> None:
        self._store[record.bill_reference] = record.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._store)
