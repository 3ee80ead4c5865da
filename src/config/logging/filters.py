"""Filter que enriquece e higieniza cada registro de log.

Injeta service e correlation_id; remove atributos que carregam identidade
do usuário ou valores digitados em filtros de grade.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos de `extra` que nunca chegam ao handler
SCRUBBED_LOG_FIELDS = frozenset({"user_id", "x_user_id", "value", "value2", "filters_tree"})


class CorrelationIdFilter(logging.Filter):
    """Enriquece o LogRecord; nunca descarta registros.

    Args:
        service_name: Nome do serviço.
        correlation_id_getter: Fonte do correlation_id corrente. Sem ela,
            usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        for name in SCRUBBED_LOG_FIELDS.intersection(record.__dict__):
            delattr(record, name)
        # correlation_id passado via `extra` tem precedência
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True
