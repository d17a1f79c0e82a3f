"""Router principal do PayKaduna — agrega os endpoints do gateway."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.paykaduna.bills import router as bills_router
from api.routes.paykaduna.payments import configuration_router, payments_router
from api.routes.paykaduna.taxpayers import router as taxpayers_router
from api.routes.paykaduna.webhook import router as webhook_router

# Endpoints públicos (/v1/...)
v1_router = APIRouter()
v1_router.include_router(bills_router, prefix="/bills", tags=["bills"])
v1_router.include_router(taxpayers_router, prefix="/taxpayers", tags=["taxpayers"])
v1_router.include_router(payments_router, prefix="/payments", tags=["payments"])
v1_router.include_router(configuration_router, prefix="/configuration", tags=["configuration"])

# Webhook recebido do provedor (/api/v1/paykaduna/webhook)
webhook = APIRouter()
webhook.include_router(webhook_router)
