"""Entrypoint do gateway PayKaduna.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import RequestLoggingMiddleware
from api.routes import create_api_router
from api.routes.errors import register_exception_handlers
from app.bootstrap import initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings, get_paykaduna_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (secrets ausentes impedem o boot)
    """
    base = get_base_settings()
    logger.info(
        "app_starting",
        extra={
            "service": base.service_name,
            "environment": base.environment,
            "port": base.port,
            "paykaduna_base_url": get_paykaduna_settings().base_url,
        },
    )
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": base.service_name})


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="PayKaduna Integration",
        description="Gateway de billing e pagamentos PayKaduna IBS",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/docs/json",
    )

    fastapi_app.add_middleware(RequestLoggingMiddleware)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_base_settings().cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(fastapi_app)
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    base = get_base_settings()
    logger.info("app_starting_uvicorn", extra={"port": base.port, "environment": base.environment})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=base.port,
        reload=base.is_development,
    )


if __name__ == "__main__":
    main()
