"""Protocolo de persistência das preferências de grade (lado servidor)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class GridPreferenceStoreProtocol(ABC):
    """Um documento opaco por (usuário, recurso), sobrescrito a cada upsert."""

    @abstractmethod
    async def get(self, user_id: str, resource: str) -> dict[str, Any] | None: ...

    @abstractmethod
    async def upsert(self, user_id: str, resource: str, document: dict[str, Any]) -> None: ...

    async def ping(self) -> bool:
        """Verifica se o backend responde (readiness)."""
        return True

    async def close(self) -> None:
        """Libera conexões do backend (no-op por padrão)."""
        return None
