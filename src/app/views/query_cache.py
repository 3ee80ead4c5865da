"""Cache de leituras de preferência, indexado por chave de consulta.

Uma leitura cacheada evita o GET ao remontar a mesma tela. Toda gravação
bem sucedida invalida a chave do recurso, de modo que a próxima montagem
lê o documento novo.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Any

from app.domain.grid_preference import PREFERENCES_PATH

if TYPE_CHECKING:
    from config.settings import PreferenceSyncSettings

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


def preference_cache_key(resource: str) -> tuple[str, str]:
    """Chave da leitura GET /preferences/grid?resource=<resource>."""
    return (PREFERENCES_PATH, resource)


class QueryCache:
    """Cache em memória com TTL opcional e invalidação por chave.

    Args:
        ttl_seconds: Validade das entradas (0 = sem expiração)
        clock: Relógio monotônico (injetável em testes)
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}
        self._hits = 0
        self._misses = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @classmethod
    def from_settings(cls, settings: PreferenceSyncSettings) -> QueryCache:
        """Cache com o TTL de PREFERENCES_CACHE_TTL_SECONDS."""
        return cls(ttl_seconds=settings.cache_ttl_seconds)

    def _expired(self, stored_at: float) -> bool:
        return self._ttl > 0 and self._clock() - stored_at >= self._ttl

    def get(self, key: Hashable) -> Any | None:
        entry = self._entries.get(key)
        if entry is None or self._expired(entry[0]):
            self._entries.pop(key, None)
            self._misses += 1
            return None
        self._hits += 1
        return entry[1]

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def __contains__(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not self._expired(entry[0])

    def invalidate(self, key: Hashable) -> bool:
        """Remove a entrada; retorna True se ela existia."""
        removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug(
                "query_cache_invalidated",
                extra={
                    "component": "query_cache",
                    "action": "invalidate",
                    "result": "ok",
                    "key": repr(key),
                },
            )
        return removed

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info(
            "query_cache_cleared",
            extra={
                "component": "query_cache",
                "action": "clear",
                "result": "ok",
                "items_cleared": count,
            },
        )

    def stats(self) -> dict[str, int]:
        return {
            "total_entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
        }
