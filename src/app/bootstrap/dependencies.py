"""Wiring do store de preferências conforme configuração.

    memory -> MemoryGridPreferenceStore (só development)
    redis  -> RedisGridPreferenceStore sobre redis.asyncio

O cliente Redis pertence ao store: o lifespan da app fecha os dois juntos.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.stores import MemoryGridPreferenceStore, RedisGridPreferenceStore
from config.settings import (
    BaseSettings,
    PreferenceStoreSettings,
    get_base_settings,
    get_preference_store_settings,
)

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.protocols.preference_store import GridPreferenceStoreProtocol

logger = logging.getLogger(__name__)

REDIS_SOCKET_TIMEOUT_SECONDS = 5.0


def _create_async_redis_client(redis_url: str) -> AsyncRedis:
    from redis.asyncio import Redis as AsyncRedis

    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    # Conexão é preguiçosa: nada abre socket até o primeiro comando
    client: AsyncRedis = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
    )
    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info(
        "async_redis_client_created",
        extra={"component": "bootstrap", "result": "ok", "host": host},
    )
    return client


def create_preference_store(
    store_settings: PreferenceStoreSettings | None = None,
    base_settings: BaseSettings | None = None,
) -> GridPreferenceStoreProtocol:
    """Cria o store de preferências do backend configurado.

    Raises:
        ValueError: backend inválido ou redis sem REDIS_URL.
    """
    store_settings = store_settings or get_preference_store_settings()
    base_settings = base_settings or get_base_settings()
    backend = store_settings.backend

    if backend == "redis":
        client = _create_async_redis_client(base_settings.redis_url)
        store: GridPreferenceStoreProtocol = RedisGridPreferenceStore(
            client, prefix=store_settings.redis_prefix
        )
    elif backend == "memory":
        if not base_settings.is_development:
            logger.warning(
                "memory_store_in_non_dev",
                extra={
                    "component": "bootstrap",
                    "backend": backend,
                    "environment": base_settings.environment,
                },
            )
        store = MemoryGridPreferenceStore()
    else:
        msg = f"PREFERENCES_STORE_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info(
        "preference_store_created",
        extra={"component": "bootstrap", "result": "ok", "backend": backend},
    )
    return store
