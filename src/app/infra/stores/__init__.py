"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: Espelho de bills em memória
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryBillStore

__all__ = [
    "MemoryBillStore",
]
