"""Protocolo do cliente remoto de preferências de grade.

Evita dependência direta de app.views sobre a infra HTTP; testes usam fakes.
"""

from __future__ import annotations

from typing import Any, Protocol


class GridPreferenceClientProtocol(Protocol):
    """Contrato mínimo para leitura/gravação do documento de preferência."""

    async def fetch(self, resource: str) -> dict[str, Any]:
        """Documento salvo do recurso (``{}`` quando ausente).

        Raises:
            InfrastructureError: falha de transporte.
        """
        ...

    async def save(self, payload: dict[str, Any]) -> None:
        """Grava o documento inteiro (corpo do PUT).

        Raises:
            InfrastructureError: falha de transporte.
        """
        ...
