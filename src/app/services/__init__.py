"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.bill_mirror import PAYMENT_SUCCESS_EVENTS, BillMirrorService

__all__ = [
    "PAYMENT_SUCCESS_EVENTS",
    "BillMirrorService",
]
