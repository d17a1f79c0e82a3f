"""Modelos do PayKaduna usados entre conector e aplicação."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class WebhookEvent:
    """Evento recebido via webhook (já autenticado e validado)."""

    event: str
    data: dict[str, Any] = field(default_factory=dict)
    message: str = ""

    @property
    def bill_reference(self) -> str | None:
        reference = self.data.get("billReference")
        return reference if isinstance(reference, str) and reference else None

    @property
    def has_invoice_no(self) -> bool:
        return "invoiceNo" in self.data
