"""Redis Grid Preference Store: staging/produção.

Estrutura:
    {prefix}{user_id}:{resource} → JSON do documento de preferência
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from app.protocols.preference_store import GridPreferenceStoreProtocol
from utils.errors import PreferenceStoreUnavailableError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo para namespace de preferências
PREFERENCE_PREFIX = "grid_pref:"


class RedisGridPreferenceStore(GridPreferenceStoreProtocol):
    """Store de preferências usando redis.asyncio.

    Args:
        redis_client: Cliente Redis assíncrono
        prefix: Namespace das chaves
    """

    def __init__(self, redis_client: AsyncRedis, prefix: str = PREFERENCE_PREFIX) -> None:
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, user_id: str, resource: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{self._prefix}{user_id}:{resource}"

    async def get(self, user_id: str, resource: str) -> dict[str, Any] | None:
        try:
            data = await self._redis.get(self._key(user_id, resource))
        except RedisError as exc:
            logger.error(
                "preference_store_unavailable",
                extra={
                    "component": "redis_preference_store",
                    "action": "get",
                    "result": "error",
                    "resource": resource,
                    "error_type": type(exc).__name__,
                },
            )
            raise PreferenceStoreUnavailableError("redis_get_failed") from exc

        if data is None:
            return None
        try:
            document = json.loads(data if isinstance(data, str) else data.decode())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                "preference_document_parse_error",
                extra={
                    "component": "redis_preference_store",
                    "action": "get",
                    "result": "ignored",
                    "resource": resource,
                    "error": str(e),
                },
            )
            return None
        return document if isinstance(document, dict) else None

    async def upsert(self, user_id: str, resource: str, document: dict[str, Any]) -> None:
        try:
            await self._redis.set(self._key(user_id, resource), json.dumps(document))
        except RedisError as exc:
            logger.error(
                "preference_store_unavailable",
                extra={
                    "component": "redis_preference_store",
                    "action": "upsert",
                    "result": "error",
                    "resource": resource,
                    "error_type": type(exc).__name__,
                },
            )
            raise PreferenceStoreUnavailableError("redis_set_failed") from exc
        logger.debug(
            "preference_saved",
            extra={"component": "redis_preference_store", "action": "upsert", "resource": resource},
        )

    async def ping(self) -> bool:
        return bool(await self._redis.ping())

    async def close(self) -> None:
        await self._redis.aclose()
