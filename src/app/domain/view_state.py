"""ViewState - estado de exibição de uma grade (por usuário, por recurso).

Colunas visíveis, ordem das colunas, ordenação e árvore de filtros.
Imutável: o ViewStateStore troca a instância inteira a cada transição.
"""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from filters.sorting import SortDir
from filters.tree import clear
from filters.types import GroupNode

VIEW_STATE_FIELDS: Final[tuple[str, ...]] = (
    "visible_columns",
    "columns_order",
    "sort_by",
    "sort_dir",
    "filters_tree",
)


class ViewState(BaseModel):
    """Snapshot do estado de uma grade.

    Attributes:
        visible_columns: Coluna -> visível; coluna ausente conta como visível
        columns_order: Ordem de exibição das colunas
        sort_by: Coluna de ordenação (None = ordem da fonte)
        sort_dir: Direção da ordenação
        filters_tree: Raiz da árvore de filtros
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    visible_columns: dict[str, bool] = Field(default_factory=dict, alias="visibleColumns")
    columns_order: tuple[str, ...] = Field(default=(), alias="columnsOrder")
    sort_by: str | None = Field(default=None, alias="sortBy")
    sort_dir: SortDir = Field(default="asc", alias="sortDir")
    filters_tree: GroupNode = Field(default_factory=clear, alias="filtersTree")
