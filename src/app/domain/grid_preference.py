"""Documento de preferência de grade persistido no servidor.

Formato de fio:
    GET  /preferences/grid?resource=cash_bases
         -> {"columns": {"visible": {...}, "order": [...], "filtersTree": {...}},
             "sort": {"by": "description", "dir": "asc"}}   ou {}
    PUT  /preferences/grid
         <- {"resource": "cash_bases", "columns": {...}, "sort": {...}}

A leitura é tolerante: seção inválida conta como ausente. A escrita é
validada (a API responde 422 para corpo inválido).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PREFERENCES_PATH = "/preferences/grid"


class ColumnsPreference(BaseModel):
    """Seção ``columns`` (visibilidade, ordem e árvore de filtros)."""

    model_config = ConfigDict(populate_by_name=True)

    visible: dict[str, bool] | None = None
    order: list[str] | None = None
    filters_tree: dict[str, Any] | None = Field(default=None, alias="filtersTree")


class SortPreference(BaseModel):
    by: str | None = None
    dir: str | None = None


class GridPreferenceDocument(BaseModel):
    """Documento armazenado por (usuário, recurso); sobrescrito a cada gravação."""

    columns: ColumnsPreference = Field(default_factory=ColumnsPreference)
    sort: SortPreference | None = None

    @property
    def is_empty(self) -> bool:
        return not self.to_wire()

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return {key: value for key, value in data.items() if value}


class GridPreferenceWrite(GridPreferenceDocument):
    """Corpo do PUT: o documento mais a chave do recurso."""

    resource: str = Field(min_length=1)

    def document(self) -> GridPreferenceDocument:
        return GridPreferenceDocument(columns=self.columns, sort=self.sort)


def _section(model: type[BaseModel], raw: Any, resource: str) -> Any:
    if raw is None:
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        logger.warning(
            "preference_section_invalid",
            extra={
                "component": "grid_preference",
                "action": "parse",
                "result": "ignored",
                "resource": resource,
                "section": model.__name__,
                "error_count": exc.error_count(),
            },
        )
        return None


def parse_preference_document(raw: Any, resource: str = "") -> GridPreferenceDocument:
    """Converte a resposta do GET em documento; o que não valida vira ausente."""
    if raw is None:
        return GridPreferenceDocument()
    if not isinstance(raw, Mapping):
        logger.warning(
            "preference_document_invalid",
            extra={
                "component": "grid_preference",
                "action": "parse",
                "result": "ignored",
                "resource": resource,
                "payload_type": type(raw).__name__,
            },
        )
        return GridPreferenceDocument()

    columns = _section(ColumnsPreference, raw.get("columns"), resource)
    sort = _section(SortPreference, raw.get("sort"), resource)
    return GridPreferenceDocument(
        columns=columns if columns is not None else ColumnsPreference(),
        sort=sort,
    )
