"""ViewStateStore - estado em memória de uma grade.

Cada setter é uma transição atômica: troca o snapshot inteiro e notifica os
assinantes com um ViewStateChange. Atribuir um valor igual ao atual não é
mudança e não notifica. Pedidos inválidos (coluna ausente, direção
desconhecida, id de nó inexistente) são no-ops e retornam False.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from app.domain.view_state import ViewState
from filters.tree import (
    add_group,
    add_leaf,
    clear,
    is_well_formed,
    remove_node,
    set_logical,
    update_leaf,
)
from filters.types import FieldRegistry, GroupNode, Logical

logger = logging.getLogger(__name__)

ChangeOrigin = Literal["user", "hydration"]

_SORT_DIRECTIONS = frozenset({"asc", "desc"})


@dataclass(frozen=True, slots=True)
class ViewStateChange:
    """Notificação de transição.

    Attributes:
        fields: Nomes dos campos de ViewState que mudaram
        origin: "user" (ação na tela) ou "hydration" (documento do servidor)
        state: Snapshot após a transição
    """

    fields: frozenset[str]
    origin: ChangeOrigin
    state: ViewState


ChangeListener = Callable[[ViewStateChange], None]


class ViewStateStore:
    """Estado de exibição de uma tela, com helpers de coluna, ordenação e filtro.

    Args:
        defaults: Estado inicial da tela
        registry: Campos filtráveis da tela (usado pelos helpers de filtro)
    """

    def __init__(self, defaults: ViewState, registry: FieldRegistry | None = None) -> None:
        self._defaults = defaults
        self._state = defaults
        self._registry = registry if registry is not None else FieldRegistry()
        self._listeners: list[ChangeListener] = []

    @property
    def defaults(self) -> ViewState:
        return self._defaults

    @property
    def registry(self) -> FieldRegistry:
        return self._registry

    @property
    def state(self) -> ViewState:
        return self._state

    def snapshot(self) -> ViewState:
        return self._state

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Registra assinante; retorna função que cancela a assinatura."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, updates: Mapping[str, Any], origin: ChangeOrigin = "user") -> bool:
        changed = {
            name: value for name, value in updates.items() if getattr(self._state, name) != value
        }
        if not changed:
            return False
        self._state = self._state.model_copy(update=changed)
        change = ViewStateChange(fields=frozenset(changed), origin=origin, state=self._state)
        logger.debug(
            "view_state_changed",
            extra={
                "component": "view_state_store",
                "action": "commit",
                "result": origin,
                "fields": sorted(changed),
            },
        )
        for listener in list(self._listeners):
            listener(change)
        return True

    # ──────────────────────────────────────────────────────────────
    # Setters
    # ──────────────────────────────────────────────────────────────

    def set_visible_columns(self, visible: Mapping[str, bool]) -> bool:
        return self._commit({"visible_columns": {str(k): bool(v) for k, v in visible.items()}})

    def set_columns_order(self, order: Iterable[str]) -> bool:
        return self._commit({"columns_order": tuple(order)})

    def set_sort_by(self, column: str | None) -> bool:
        return self._commit({"sort_by": column or None})

    def set_sort_dir(self, direction: str) -> bool:
        if direction not in _SORT_DIRECTIONS:
            return False
        return self._commit({"sort_dir": direction})

    def set_filters_tree(self, tree: GroupNode) -> bool:
        if not is_well_formed(tree):
            return False
        return self._commit({"filters_tree": tree})

    def replace(self, state: ViewState, origin: ChangeOrigin = "hydration") -> bool:
        """Aplica um estado inteiro numa única transição."""
        return self._commit(
            {
                "visible_columns": state.visible_columns,
                "columns_order": state.columns_order,
                "sort_by": state.sort_by,
                "sort_dir": state.sort_dir,
                "filters_tree": state.filters_tree,
            },
            origin,
        )

    # ──────────────────────────────────────────────────────────────
    # Colunas
    # ──────────────────────────────────────────────────────────────

    def is_column_visible(self, column: str) -> bool:
        return self._state.visible_columns.get(column, True)

    def set_column_visible(self, column: str, visible: bool) -> bool:
        return self.set_visible_columns({**self._state.visible_columns, column: visible})

    def toggle_column(self, column: str) -> bool:
        return self.set_column_visible(column, not self.is_column_visible(column))

    def move_column(self, column: str, offset: int) -> bool:
        """Move a coluna ``offset`` posições (-1 = subir, 1 = descer)."""
        order = list(self._state.columns_order)
        if column not in order or offset == 0:
            return False
        index = order.index(column)
        target = index + offset
        if target < 0 or target >= len(order):
            return False
        order.insert(target, order.pop(index))
        return self.set_columns_order(order)

    def visible_columns_in_order(self) -> list[str]:
        """Colunas a renderizar: a ordem filtrada pela visibilidade."""
        return [col for col in self._state.columns_order if self.is_column_visible(col)]

    # ──────────────────────────────────────────────────────────────
    # Ordenação
    # ──────────────────────────────────────────────────────────────

    def toggle_sort(self, column: str) -> bool:
        """Coluna nova ordena asc; a coluna atual inverte a direção."""
        if self._state.sort_by == column:
            flipped = "desc" if self._state.sort_dir == "asc" else "asc"
            return self._commit({"sort_dir": flipped})
        return self._commit({"sort_by": column, "sort_dir": "asc"})

    # ──────────────────────────────────────────────────────────────
    # Filtros
    # ──────────────────────────────────────────────────────────────

    def _set_tree(self, tree: GroupNode) -> bool:
        if tree is self._state.filters_tree:
            return False
        return self._commit({"filters_tree": tree})

    def add_filter(self, parent_group_id: str | None = None, field: str | None = None) -> bool:
        """Acrescenta condição no grupo (raiz por padrão) com o campo informado ou o primeiro."""
        field_def = self._registry.get(field) if field else self._registry.first()
        if field_def is None:
            return False
        tree = self._state.filters_tree
        return self._set_tree(add_leaf(tree, parent_group_id or tree.id, field_def))

    def add_filter_group(self, parent_group_id: str | None = None, logical: Logical = "AND") -> bool:
        tree = self._state.filters_tree
        return self._set_tree(add_group(tree, parent_group_id or tree.id, logical))

    def remove_filter(self, node_id: str) -> bool:
        return self._set_tree(remove_node(self._state.filters_tree, node_id))

    def update_filter(self, node_id: str, patch: Mapping[str, Any]) -> bool:
        return self._set_tree(
            update_leaf(self._state.filters_tree, node_id, patch, self._registry)
        )

    def set_filter_logical(self, group_id: str, logical: Logical) -> bool:
        return self._set_tree(set_logical(self._state.filters_tree, group_id, logical))

    def clear_filters(self) -> bool:
        """Troca a árvore por uma raiz vazia; no-op se já está vazia e em AND."""
        tree = self._state.filters_tree
        if not tree.children and tree.logical == "AND":
            return False
        return self._commit({"filters_tree": clear()})
