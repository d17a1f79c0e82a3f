"""Protocolo de domínio para o espelho de bills.

Interface leve (ABC) dependida por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.bill import BillRecord


class BillStoreProtocol(ABC):
    """Contrato mínimo assíncrono para o espelho de bills.

    Métodos canônicos:
    - get(bill_reference) -> BillRecord | None
    - upsert(record) -> None
      Cria ou substitui o bill, incluindo todos os itens.
    """

    @abstractmethod
    async def get(self, bill_reference: str) -> BillRecord | None:
        """Retorna o bill espelhado ou None se desconhecido."""

    @abstractmethod
    async def upsert(self, record: BillRecord) -> None:
        """Cria ou substitui o bill espelhado."""
