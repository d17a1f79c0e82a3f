"""Agregador de rotas — registra todos os routers da API.

Este módulo é responsável por criar o router principal da API
e incluir os sub-routers de cada área.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.paykaduna.router import v1_router
from api.routes.paykaduna.router import webhook as webhook_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health check (sem prefixo, /health na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(v1_router, prefix="/v1")

    api_router.include_router(
        webhook_router,
        prefix="/api/v1/paykaduna",
        tags=["webhook"],
    )

    return api_router
