"""Factories de dependências — composition root do gateway.

Cria (uma vez por processo) as implementações concretas a partir das
settings imutáveis carregadas no startup. As rotas obtêm as dependências
via `Depends(...)`, o que permite substituí-las em testes com
`app.dependency_overrides`.
"""

from __future__ import annotations

from functools import lru_cache

from api.connectors.paykaduna import PayKadunaService, create_paykaduna_client
from api.connectors.paykaduna.webhook import WebhookVerifier
from app.infra.stores import MemoryBillStore
from app.protocols.bill_store import BillStoreProtocol
from app.services.bill_mirror import BillMirrorService
from app.use_cases.paykaduna import ProcessWebhookEventUseCase
from config.settings import get_paykaduna_settings


@lru_cache(maxsize=1)
def get_paykaduna_service() -> PayKadunaService:
    """Serviço PayKaduna (singleton) com cliente assinado e retry."""
    settings = get_paykaduna_settings()
    return PayKadunaService(
        client=create_paykaduna_client(settings),
        engine_code=settings.engine_code,
    )


@lru_cache(maxsize=1)
def get_webhook_verifier() -> WebhookVerifier:
    """Verificador de webhooks (singleton) com PK_WEBHOOK_SECRET_KEY."""
    settings = get_paykaduna_settings()
    return WebhookVerifier(
        settings.webhook_secret_key,
        mode=settings.webhook_signature_mode,  # type: ignore[arg-type]
    )


@lru_cache(maxsize=1)
def get_bill_store() -> BillStoreProtocol:
    """Espelho de bills em memória (singleton), compartilhado por rotas e webhook."""
    return MemoryBillStore()


def get_bill_mirror() -> BillMirrorService:
    return BillMirrorService(get_bill_store())


def get_webhook_use_case() -> ProcessWebhookEventUseCase:
    return ProcessWebhookEventUseCase(
        client=get_paykaduna_service(),
        bill_mirror=get_bill_mirror(),
    )
