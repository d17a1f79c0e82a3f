"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (bills, taxpayers, pagamentos, webhook, health)
- Validação inicial de request (body, query params)
- Delegação para connectors/use_cases
- Respostas HTTP e envelope de erro

Estrutura:
- routes/paykaduna/: endpoints do gateway e webhook
- routes/health/: health check
- errors.py: handlers de exceção

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
