"""Modelos de dominio para o espelho local de bills.

O espelho guarda a ultima visao conhecida de cada bill do provedor
para consulta local, sem acoplar a forma de persistencia.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BillItemRecord(BaseModel):
    """Item de um bill (revenue head)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    revenue_head: str = Field(default="", alias="revenueHead")
    amount: float = Field(default=0.0)
    revenue_code: str = Field(default="", alias="revenueCode")


class BillRecord(BaseModel):
    """Bill espelhado localmente."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    bill_reference: str = Field(..., alias="billReference", min_length=1)
    pay_status: str = Field(default="", alias="payStatus")
    narration: str | None = Field(default=None)
    head: str | None = Field(default=None)
    subhead: str | None = Field(default=None)
    paid_at: datetime | None = Field(default=None, alias="paidAt")
    invoice_no: str | None = Field(default=None, alias="invoiceNo")
    invoice_url: str | None = Field(default=None, alias="invoiceUrl")
    metadata: dict[str, Any] | None = Field(default=None)
    items: list[BillItemRecord] = Field(default_factory=list)
    last_event: str | None = Field(
        default=None,
        description="Ultimo evento de webhook aplicado ao bill.",
    )
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


__all__ = ["BillItemRecord", "BillRecord"]
