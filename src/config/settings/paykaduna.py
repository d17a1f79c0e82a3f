"""Settings específicas do PayKaduna.

Duas chaves independentes:
- PK_API_KEY: assinatura HMAC-SHA256 das chamadas de saída
- PK_WEBHOOK_SECRET_KEY: verificação HMAC-SHA512 dos webhooks recebidos
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from api.connectors.paykaduna.errors import ConfigurationError
from api.connectors.paykaduna.webhook.verify import SIGNATURE_MODES
from config.settings.base.core import parse_environment


@dataclass(frozen=True)
class PayKadunaSettings:
    """Configurações do provedor PayKaduna.

    Attributes:
        api_key: Chave de assinatura das requisições (X-Api-Signature)
        webhook_secret_key: Chave de verificação de webhooks
        engine_code: Engine code injetado na criação de bills
        base_url_test: URL base do ambiente de testes
        base_url_prod: URL base de produção
        environment: Ambiente de execução (seleciona a URL base)
        request_timeout_seconds: Timeout por tentativa
        max_retries: Retries após a primeira tentativa
        webhook_signature_mode: raw | reserialized
    """

    api_key: str = ""
    webhook_secret_key: str = ""
    engine_code: str = ""

    base_url_test: str = ""
    base_url_prod: str = ""
    environment: str = "development"

    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    webhook_signature_mode: str = "raw"

    @property
    def base_url(self) -> str:
        """URL base conforme ambiente (produção usa PK_BASE_URL_PROD)."""
        if self.environment == "production":
            return self.base_url_prod
        return self.base_url_test

    def require_secrets(self) -> None:
        """Falha se alguma das chaves estiver ausente ou vazia.

        Raises:
            ConfigurationError: Lista as chaves ausentes
        """
        missing = [
            name
            for name, value in (
                ("PK_API_KEY", self.api_key),
                ("PK_WEBHOOK_SECRET_KEY", self.webhook_secret_key),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationError(f"Secrets obrigatórios ausentes: {', '.join(missing)}")

    def validate(self) -> list[str]:
        """Valida configurações mínimas do PayKaduna.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("PK_API_KEY não configurado")

        if not self.webhook_secret_key:
            errors.append("PK_WEBHOOK_SECRET_KEY não configurado")

        if not self.engine_code:
            errors.append("PK_ENGINE_CODE não configurado")

        if not self.base_url.startswith(("http://", "https://")):
            errors.append("PK_BASE_URL_TEST/PK_BASE_URL_PROD deve ser uma URL válida")

        if self.request_timeout_seconds <= 0:
            errors.append("PK_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("PK_MAX_RETRIES deve ser >= 0")

        if self.webhook_signature_mode not in SIGNATURE_MODES:
            errors.append("PK_WEBHOOK_SIGNATURE_MODE deve ser 'raw' ou 'reserialized'")

        return errors


def _load_from_env() -> PayKadunaSettings:
    """Carrega PayKadunaSettings a partir de variáveis de ambiente."""
    return PayKadunaSettings(
        api_key=os.getenv("PK_API_KEY", ""),
        webhook_secret_key=os.getenv("PK_WEBHOOK_SECRET_KEY", ""),
        engine_code=os.getenv("PK_ENGINE_CODE", ""),
        base_url_test=os.getenv("PK_BASE_URL_TEST", ""),
        base_url_prod=os.getenv("PK_BASE_URL_PROD", ""),
        environment=parse_environment(os.getenv("ENVIRONMENT")),
        request_timeout_seconds=float(os.getenv("PK_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("PK_MAX_RETRIES", "3")),
        webhook_signature_mode=os.getenv("PK_WEBHOOK_SIGNATURE_MODE", "raw").lower(),
    )


@lru_cache(maxsize=1)
def get_paykaduna_settings() -> PayKadunaSettings:
    """Retorna instância cacheada de PayKadunaSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
