"""Settings da sincronização de preferências de grade (lado cliente).

O quiet period do debounce, o endpoint e o timeout das chamadas HTTP.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class PreferenceSyncSettings:
    """Configurações do PreferenceSync.

    Attributes:
        api_base_url: URL base da API (GET/PUT /preferences/grid)
        debounce_ms: Quiet period após a última alteração antes de gravar
        request_timeout_seconds: Timeout das requisições HTTP
        max_retries: Retentativas da camada de transporte (0 = nenhuma)
        cache_ttl_seconds: TTL do cache de leitura (0 = sem expiração)
    """

    api_base_url: str = "http://localhost:8080"
    debounce_ms: int = 600
    request_timeout_seconds: float = 10.0
    max_retries: int = 0
    cache_ttl_seconds: int = 300

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    def validate(self) -> list[str]:
        errors: list[str] = []

        if not self.api_base_url.startswith(("http://", "https://")):
            errors.append("PREFERENCES_API_BASE_URL deve começar com http:// ou https://")

        if self.debounce_ms < 0:
            errors.append("PREFERENCES_DEBOUNCE_MS deve ser >= 0")

        if self.request_timeout_seconds <= 0:
            errors.append("PREFERENCES_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("PREFERENCES_MAX_RETRIES deve ser >= 0")

        if self.cache_ttl_seconds < 0:
            errors.append("PREFERENCES_CACHE_TTL_SECONDS deve ser >= 0")

        return errors


def _load_preference_sync_from_env() -> PreferenceSyncSettings:
    return PreferenceSyncSettings(
        api_base_url=os.getenv("PREFERENCES_API_BASE_URL", "http://localhost:8080").rstrip("/"),
        debounce_ms=int(os.getenv("PREFERENCES_DEBOUNCE_MS", "600")),
        request_timeout_seconds=float(os.getenv("PREFERENCES_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("PREFERENCES_MAX_RETRIES", "0")),
        cache_ttl_seconds=int(os.getenv("PREFERENCES_CACHE_TTL_SECONDS", "300")),
    )


@lru_cache(maxsize=1)
def get_preference_sync_settings() -> PreferenceSyncSettings:
    """Retorna instância cacheada de PreferenceSyncSettings."""
    return _load_preference_sync_from_env()
