"""Settings do armazenamento de preferências (lado servidor)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

PreferenceStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class PreferenceStoreSettings:
    """Configurações do store de preferências.

    Attributes:
        backend: Backend do documento (user, resource)
        redis_prefix: Namespace das chaves no Redis
    """

    backend: PreferenceStoreBackend = "memory"
    redis_prefix: str = "grid_pref:"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do store.

        Args:
            base: BaseSettings para verificar ambiente e redis_url.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"PREFERENCES_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("PREFERENCES_STORE_BACKEND=memory proibido em staging/production")

        if self.backend == "redis" and not base.redis_url:
            errors.append("REDIS_URL obrigatório com PREFERENCES_STORE_BACKEND=redis")

        if not self.redis_prefix:
            errors.append("PREFERENCES_REDIS_PREFIX não pode ser vazio")

        return errors


def _load_store_from_env() -> PreferenceStoreSettings:
    backend_str = os.getenv("PREFERENCES_STORE_BACKEND", "memory").lower()
    backend: PreferenceStoreBackend = "redis" if backend_str == "redis" else "memory"
    return PreferenceStoreSettings(
        backend=backend,
        redis_prefix=os.getenv("PREFERENCES_REDIS_PREFIX", "grid_pref:"),
    )


@lru_cache(maxsize=1)
def get_preference_store_settings() -> PreferenceStoreSettings:
    """Retorna instância cacheada de PreferenceStoreSettings."""
    return _load_store_from_env()
