"""Catálogo de recursos de grade (config/resources/grid_resources.yaml).

Cada recurso declara seus campos filtráveis e o estado de exibição default.
O arquivo é lido uma vez (lru_cache); arquivo ausente ou inválido resulta
em catálogo vazio e um warning.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.domain.view_state import ViewState
from filters.sorting import SortDir
from filters.types import FieldDef, FieldRegistry

logger = logging.getLogger(__name__)

_CATALOG_PATH = Path(__file__).resolve().parents[2] / "config" / "resources" / "grid_resources.yaml"


class ResourceDefaults(BaseModel):
    """Estado de exibição default declarado no catálogo."""

    model_config = ConfigDict(frozen=True)

    visible_columns: dict[str, bool] = Field(default_factory=dict)
    columns_order: tuple[str, ...] = ()
    sort_by: str | None = None
    sort_dir: SortDir = "asc"


class ResourceDefinition(BaseModel):
    """Declaração de uma tela: chave do recurso, campos e defaults."""

    model_config = ConfigDict(frozen=True)

    resource: str = Field(min_length=1)
    label: str = ""
    fields: tuple[FieldDef, ...] = ()
    defaults: ResourceDefaults = Field(default_factory=ResourceDefaults)

    @property
    def registry(self) -> FieldRegistry:
        return FieldRegistry(self.fields)

    def default_view_state(self) -> ViewState:
        """Novo ViewState default (raiz de filtros com id novo a cada chamada)."""
        return ViewState(
            visible_columns=dict(self.defaults.visible_columns),
            columns_order=self.defaults.columns_order,
            sort_by=self.defaults.sort_by,
            sort_dir=self.defaults.sort_dir,
        )


def _read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@lru_cache(maxsize=8)
def load_resource_catalog(path: Path | str | None = None) -> dict[str, ResourceDefinition]:
    """Carrega o catálogo de recursos (cached por caminho).

    Returns:
        Dict resource -> ResourceDefinition, na ordem do arquivo.
    """
    catalog_path = Path(path) if path is not None else _CATALOG_PATH
    if not catalog_path.exists():
        logger.warning(
            "resource_catalog_not_found",
            extra={"component": "resource_catalog", "action": "load", "path": str(catalog_path)},
        )
        return {}

    try:
        raw = _read_yaml(catalog_path)
    except yaml.YAMLError as e:
        logger.warning(
            "resource_catalog_yaml_invalid",
            extra={"component": "resource_catalog", "action": "load", "error": str(e)},
        )
        return {}

    entries = raw.get("resources") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        logger.warning(
            "resource_catalog_empty",
            extra={"component": "resource_catalog", "action": "load", "path": str(catalog_path)},
        )
        return {}

    catalog: dict[str, ResourceDefinition] = {}
    for entry in entries:
        try:
            definition = ResourceDefinition.model_validate(entry)
        except ValidationError as exc:
            logger.warning(
                "resource_definition_invalid",
                extra={
                    "component": "resource_catalog",
                    "action": "load",
                    "result": "skipped",
                    "error_count": exc.error_count(),
                },
            )
            continue
        catalog[definition.resource] = definition

    logger.debug(
        "resource_catalog_loaded",
        extra={"component": "resource_catalog", "action": "load", "resources": len(catalog)},
    )
    return catalog


def get_resource_definition(resource: str) -> ResourceDefinition | None:
    return load_resource_catalog().get(resource)
