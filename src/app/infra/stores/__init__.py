"""Stores: implementações concretas de persistência de preferências.

Módulos disponíveis:
    - memory_stores: Store em memória para desenvolvimento/testes
    - redis_preference_store: Store Redis para staging/produção
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryGridPreferenceStore
from app.infra.stores.redis_preference_store import RedisGridPreferenceStore

__all__ = [
    "MemoryGridPreferenceStore",
    "RedisGridPreferenceStore",
]
