"""Merge do documento do servidor com o estado em memória (hidratação).

Regras, campo a campo:
    - visible: documento não vazio substitui; senão mantém o atual
    - order: só se não vazia; reconciliada com as colunas default
      (desconhecidas saem, novas entram no fim); vazia após a
      reconciliação mantém o atual
    - filtersTree: só se for uma árvore válida
    - sort.by: só se não vazio; sort.dir só se "asc" ou "desc"
    - campos em ``locked`` (já editados na tela) nunca são sobrescritos
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from app.domain.grid_preference import (
    ColumnsPreference,
    GridPreferenceDocument,
    GridPreferenceWrite,
    SortPreference,
)
from app.domain.view_state import ViewState
from filters.tree import is_well_formed
from filters.types import dump_tree, parse_tree


def reconcile_order(stored: Sequence[str], defaults: Sequence[str]) -> tuple[str, ...]:
    """Ordem salva filtrada pelas colunas conhecidas, com as novas no fim.

    Sem colunas default conhecidas, a ordem salva é mantida como está.
    """
    if not defaults:
        return tuple(dict.fromkeys(stored))
    known = set(defaults)
    kept = [col for col in dict.fromkeys(stored) if col in known]
    kept_set = set(kept)
    return (*kept, *(col for col in defaults if col not in kept_set))


def merge_preference(
    current: ViewState,
    document: GridPreferenceDocument,
    defaults: ViewState,
    locked: Iterable[str] = (),
) -> ViewState:
    """Aplica o documento sobre ``current`` e retorna o estado hidratado."""
    blocked = frozenset(locked)
    updates: dict[str, Any] = {}
    columns = document.columns
    sort = document.sort or SortPreference()

    if columns.visible and "visible_columns" not in blocked:
        updates["visible_columns"] = dict(columns.visible)

    if columns.order and "columns_order" not in blocked:
        order = reconcile_order(columns.order, defaults.columns_order)
        if order:
            updates["columns_order"] = order

    if columns.filters_tree is not None and "filters_tree" not in blocked:
        tree = parse_tree(columns.filters_tree)
        if tree is not None and is_well_formed(tree):
            updates["filters_tree"] = tree

    if sort.by and "sort_by" not in blocked:
        updates["sort_by"] = sort.by

    if sort.dir in ("asc", "desc") and "sort_dir" not in blocked:
        updates["sort_dir"] = sort.dir

    if not updates:
        return current
    return current.model_copy(update=updates)


def build_write_payload(resource: str, state: ViewState) -> dict[str, Any]:
    """Corpo do PUT com o snapshot inteiro; ``sort`` omitido sem coluna de ordenação."""
    write = GridPreferenceWrite(
        resource=resource,
        columns=ColumnsPreference(
            visible=dict(state.visible_columns),
            order=list(state.columns_order),
            filters_tree=dump_tree(state.filters_tree),
        ),
        sort=SortPreference(by=state.sort_by, dir=state.sort_dir) if state.sort_by else None,
    )
    return write.model_dump(mode="json", by_alias=True, exclude_none=True)
