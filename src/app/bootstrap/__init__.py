"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: carrega .env, configura logging e
valida as settings obrigatórias no startup.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from api.connectors.paykaduna.errors import ConfigurationError
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_paykaduna_settings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação.

    Deve ser chamada uma vez no início do serviço, antes de qualquer
    leitura de settings (as settings são cacheadas).

    Configura:
    - Variáveis de ambiente a partir de .env (sem sobrescrever o ambiente)
    - Logging estruturado JSON com correlation_id (texto em development)
    """
    load_dotenv(override=False)
    base = get_base_settings()

    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        json_output=not base.is_development,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Secrets ausentes (PK_API_KEY, PK_WEBHOOK_SECRET_KEY) sempre impedem o boot.
    Demais problemas falham rápido em `staging`/`production` e apenas
    geram alerta em `development`.

    Raises:
        ConfigurationError: Secret ausente ou configuração inválida em modo estrito
    """
    base = get_base_settings()
    paykaduna = get_paykaduna_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS

    paykaduna.require_secrets()

    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"paykaduna: {error}" for error in paykaduna.validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise ConfigurationError(f"Configuração inválida para {base.environment}:\n{details}")
