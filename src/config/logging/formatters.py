"""Formatter JSON dos logs estruturados.

Campos obrigatórios: asctime, level, logger, message, correlation_id, service.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

# Nomes padronizados na saída JSON
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria o formatter JSON com os campos obrigatórios.

    Exemplo de saída:
        {"asctime": "2026-10-18T10:30:00", "level": "INFO",
         "logger": "app.views.sync", "message": "preference_saved",
         "correlation_id": "9f1c...", "service": "grid_views",
         "resource": "cash_bases"}
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))
    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
