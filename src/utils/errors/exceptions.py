"""Exceções para falhas recuperáveis de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias (rede, Redis, API)."""


class PreferenceStoreUnavailableError(InfrastructureError):
    """Backend de preferências indisponível (conexão/timeout)."""
