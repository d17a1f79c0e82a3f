"""Agregador de settings do gateway PayKaduna.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Provider settings
from config.settings.paykaduna import (
    PayKadunaSettings,
    get_paykaduna_settings,
)

__all__ = [
    # Base
    "BaseSettings",
    "Environment",
    # PayKaduna
    "PayKadunaSettings",
    "get_base_settings",
    "get_paykaduna_settings",
]
