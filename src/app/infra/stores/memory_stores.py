"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import json
from typing import Any

from app.protocols.preference_store import GridPreferenceStoreProtocol


class MemoryGridPreferenceStore(GridPreferenceStoreProtocol):
    """Store de preferências em memória: apenas para dev/test.

    Guarda o documento serializado, então quem lê recebe sempre uma cópia.
    """

    def __init__(self) -> None:
        self._store: dict[tuple[str, str], str] = {}  # (user_id, resource) -> json

    async def get(self, user_id: str, resource: str) -> dict[str, Any] | None:
        data = self._store.get((user_id, resource))
        if data is None:
            return None
        return json.loads(data)

    async def upsert(self, user_id: str, resource: str, document: dict[str, Any]) -> None:
        self._store[(user_id, resource)] = json.dumps(document)

    def __len__(self) -> int:
        return len(self._store)
