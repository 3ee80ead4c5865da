"""Protocolos e contratos do core da aplicação."""

from .preference_client import GridPreferenceClientProtocol
from .preference_store import GridPreferenceStoreProtocol

__all__ = [
    "GridPreferenceClientProtocol",
    "GridPreferenceStoreProtocol",
]
