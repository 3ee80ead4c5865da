"""
Módulo filters: árvore de filtros dinâmica das grades.

Estrutura:
    - types/: Modelo de nós (GroupNode, LeafNode) e registro de campos (FieldDef)
    - tree/: Operações puras de mutação por id e percurso
    - rules/: Operadores, defaults por tipo e avaliação sobre linhas
    - sorting/: Comparador tipado para ordenação estável
"""

from filters.rules import filter_rows, matches_tree, tree_to_query_param
from filters.sorting import SortDir, compare, compare_values, sort_rows
from filters.tree import (
    add_group,
    add_leaf,
    clear,
    find_node,
    is_well_formed,
    iter_leaves,
    remove_node,
    set_logical,
    update_leaf,
)
from filters.types import (
    FieldDef,
    FieldRegistry,
    FilterNode,
    GroupNode,
    LeafNode,
    dump_tree,
    parse_tree,
)

__all__ = [
    "FieldDef",
    "FieldRegistry",
    "FilterNode",
    "GroupNode",
    "LeafNode",
    "SortDir",
    "add_group",
    "add_leaf",
    "clear",
    "compare",
    "compare_values",
    "dump_tree",
    "filter_rows",
    "find_node",
    "is_well_formed",
    "iter_leaves",
    "matches_tree",
    "parse_tree",
    "remove_node",
    "set_logical",
    "sort_rows",
    "tree_to_query_param",
    "update_leaf",
]
