"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class PayKadunaClientProtocol(Protocol):
    """Contrato mínimo do cliente PayKaduna usado pelos casos de uso."""

    async def get_bill(self, bill_reference: str) -> Any: ...

    async def get_invoice_url(self, bill_reference: str) -> Any: ...
