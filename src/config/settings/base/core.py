"""Settings base do gateway PayKaduna.

Servidor HTTP, ambiente e logging. Settings do provedor ficam em
config/settings/paykaduna.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}

DEFAULT_SERVICE_NAME = "paykaduna-integration"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class BaseSettings:
    """Configurações do processo.

    Attributes:
        environment: development | staging | production (seleciona URL do provedor)
        service_name: Campo `service` dos logs e do /health
        port: Porta HTTP (PORT)
        log_level: LOG_LEVEL; padrão INFO em produção e DEBUG fora dela
        cors_origins: Origens liberadas no CORS (CORS_ORIGINS, separadas por vírgula)
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    port: int = DEFAULT_PORT
    log_level: str = "DEBUG"
    cors_origins: tuple[str, ...] = field(default=("*",))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if not 0 < self.port < 65536:
            errors.append(f"PORT inválida: {self.port}")

        if not self.cors_origins:
            errors.append("CORS_ORIGINS não pode ser vazio")

        return errors


def parse_environment(value: str | None) -> Environment:
    """Normaliza ENVIRONMENT; valores desconhecidos viram development."""
    return _ENVIRONMENT_ALIASES.get((value or "").strip().lower(), "development")


def _parse_origins(value: str | None) -> tuple[str, ...]:
    if value is None:
        return ("*",)
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


def _load_base_from_env() -> BaseSettings:
    environment = parse_environment(os.getenv("ENVIRONMENT"))
    default_level = "INFO" if environment == "production" else "DEBUG"
    return BaseSettings(
        environment=environment,
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        log_level=os.getenv("LOG_LEVEL", default_level).upper(),
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS")),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
