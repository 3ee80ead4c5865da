"""Configuração centralizada de logging.

Instala um único handler JSON no logger raiz, com campos fixos
(correlation_id, service, level, logger, message, asctime).

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (app/bootstrap/)
    configure_logging(level="INFO", service_name="grid_views")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("preference_saved", extra={"resource": "cash_bases"})

Logs nunca carregam user_id nem valores digitados em filtros.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "grid_views"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado.

    Deve ser chamada uma vez, no bootstrap.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço gravado em todo registro.
        correlation_id_getter: Função que devolve o correlation_id corrente
            (ex: app.observability.get_correlation_id).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substitui handlers existentes (evita linhas duplicadas em reload)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger do módulo; service e correlation_id vêm do filter."""
    return logging.getLogger(name)


def log_sync_dropped(
    logger: logging.Logger,
    resource: str,
    action: str,
    reason: str,
) -> None:
    """Registra leitura/escrita de preferência descartada (sem retry).

    Args:
        logger: Logger do chamador.
        resource: Chave da grade (ex: "cash_bases").
        action: "load" ou "save".
        reason: Classe do erro ou motivo curto, sem PII.
    """
    logger.warning(
        "preference_sync_dropped",
        extra={
            "component": "preference_sync",
            "action": action,
            "result": "dropped",
            "resource": resource,
            "reason": reason,
        },
    )
