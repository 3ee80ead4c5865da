"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InfrastructureError,
    PreferenceStoreUnavailableError,
)

__all__ = [
    "InfrastructureError",
    "PreferenceStoreUnavailableError",
]
