"""Agregador de settings do serviço de grades.

Re-exporta as settings de cada domínio.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.preferences import (
    PreferenceSyncSettings,
    get_preference_sync_settings,
)
from config.settings.storage import (
    PreferenceStoreBackend,
    PreferenceStoreSettings,
    get_preference_store_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "PreferenceStoreBackend",
    "PreferenceStoreSettings",
    "PreferenceSyncSettings",
    "get_base_settings",
    "get_preference_store_settings",
    "get_preference_sync_settings",
]
