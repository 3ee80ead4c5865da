"""Operações puras e percurso da árvore de filtros."""

from filters.tree.mutations import (
    add_group,
    add_leaf,
    clear,
    remove_node,
    set_logical,
    update_leaf,
)
from filters.tree.traversal import (
    find_node,
    is_well_formed,
    iter_leaves,
    iter_nodes,
    node_ids,
)

__all__ = [
    "add_group",
    "add_leaf",
    "clear",
    "find_node",
    "is_well_formed",
    "iter_leaves",
    "iter_nodes",
    "node_ids",
    "remove_node",
    "set_logical",
    "update_leaf",
]
