"""
Exports públicos do módulo filters/types.

Modelo de nós da árvore de filtros e registro de campos.
"""

from filters.types.nodes import (
    LOGICAL_VALUES,
    EnumOption,
    FieldDef,
    FieldRegistry,
    FieldType,
    FilterNode,
    FilterValue,
    GroupNode,
    LeafNode,
    Logical,
    dump_tree,
    new_node_id,
    parse_tree,
)

__all__ = [
    "LOGICAL_VALUES",
    "EnumOption",
    "FieldDef",
    "FieldRegistry",
    "FieldType",
    "FilterNode",
    "FilterValue",
    "GroupNode",
    "LeafNode",
    "Logical",
    "dump_tree",
    "new_node_id",
    "parse_tree",
]
