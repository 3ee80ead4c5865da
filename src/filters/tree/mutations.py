"""
Operações puras sobre a árvore de filtros.

Todas recebem uma árvore e devolvem outra; a entrada nunca é alterada.
Apenas o caminho raiz → nó alvo é reconstruído; subárvores não tocadas
são compartilhadas entre a árvore antiga e a nova.

Pedidos inválidos (id inexistente, operador não permitido, campo fora do
registro) são no-ops: a função devolve o MESMO objeto recebido, de modo que
``resultado is tree`` indica que nada mudou.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from filters.rules.operators import default_value_for, is_between
from filters.types.nodes import (
    LOGICAL_VALUES,
    FieldDef,
    FieldRegistry,
    GroupNode,
    LeafNode,
    Logical,
    new_node_id,
)

_LEAF_PATCH_KEYS = frozenset({"field", "operator", "value", "value2"})

NodeEditor = Callable[[GroupNode | LeafNode], GroupNode | LeafNode | None]


def clear() -> GroupNode:
    """Nova raiz vazia (AND, sem filhos) com id novo."""
    return GroupNode(id=new_node_id(), logical="AND")


def _edit(tree: GroupNode, node_id: str, editor: NodeEditor) -> GroupNode:
    """Aplica ``editor`` ao nó ``node_id`` reconstruindo só o caminho até ele.

    O editor devolve o nó substituto, o próprio nó (sem mudança) ou None
    para remover o nó do pai. A raiz nunca é removida.
    """

    def visit(node: GroupNode | LeafNode) -> GroupNode | LeafNode | None:
        if node.id == node_id:
            return editor(node)
        if not isinstance(node, GroupNode):
            return node
        for index, child in enumerate(node.children):
            new_child = visit(child)
            if new_child is child:
                continue
            children = list(node.children)
            if new_child is None:
                del children[index]
            else:
                children[index] = new_child
            return node.model_copy(update={"children": tuple(children)})
        return node

    result = visit(tree)
    return result if isinstance(result, GroupNode) else tree


def _append_child(tree: GroupNode, parent_group_id: str, child: GroupNode | LeafNode) -> GroupNode:
    def append(node: GroupNode | LeafNode) -> GroupNode | LeafNode:
        if not isinstance(node, GroupNode):
            return node
        return node.model_copy(update={"children": (*node.children, child)})

    return _edit(tree, parent_group_id, append)


def add_leaf(tree: GroupNode, parent_group_id: str, field_def: FieldDef) -> GroupNode:
    """Acrescenta uma condição nova ao grupo ``parent_group_id``.

    O operador é o primeiro permitido pelo campo e o valor é o default do tipo.
    """
    leaf = LeafNode(
        id=new_node_id(),
        field=field_def.name,
        operator=field_def.default_operator,
        value=default_value_for(field_def.type),
    )
    return _append_child(tree, parent_group_id, leaf)


def add_group(tree: GroupNode, parent_group_id: str, logical: Logical = "AND") -> GroupNode:
    """Acrescenta um grupo vazio ao grupo ``parent_group_id``."""
    if logical not in LOGICAL_VALUES:
        return tree
    return _append_child(tree, parent_group_id, GroupNode(id=new_node_id(), logical=logical))


def remove_node(tree: GroupNode, node_id: str) -> GroupNode:
    """Remove o nó (e toda a sua subárvore). A raiz não pode ser removida."""
    if node_id == tree.id:
        return tree
    return _edit(tree, node_id, lambda node: None)


def set_logical(tree: GroupNode, group_id: str, logical: Logical) -> GroupNode:
    if logical not in LOGICAL_VALUES:
        return tree

    def flip(node: GroupNode | LeafNode) -> GroupNode | LeafNode:
        if not isinstance(node, GroupNode) or node.logical == logical:
            return node
        return node.model_copy(update={"logical": logical})

    return _edit(tree, group_id, flip)


def update_leaf(
    tree: GroupNode,
    node_id: str,
    patch: Mapping[str, Any],
    registry: FieldRegistry,
) -> GroupNode:
    """Altera field/operator/value/value2 da folha ``node_id``.

    Regras:
        - troca de campo: o operador atual é mantido se o novo campo o permitir,
          senão volta ao primeiro operador do novo campo
        - troca de tipo de campo: value volta ao default do novo tipo e value2
          é limpo, salvo quando o patch traz valores explícitos
        - operador explícito não permitido pelo campo resultante: no-op
        - campo fora do registro: no-op
        - value2 só sobrevive com operador ``between``
    """
    updates = {key: value for key, value in patch.items() if key in _LEAF_PATCH_KEYS}
    if not updates:
        return tree

    def apply(node: GroupNode | LeafNode) -> GroupNode | LeafNode:
        if not isinstance(node, LeafNode):
            return node
        new_leaf = _patched_leaf(node, updates, registry)
        if new_leaf is None or new_leaf == node:
            return node
        return new_leaf

    return _edit(tree, node_id, apply)


def _patched_leaf(
    leaf: LeafNode,
    updates: Mapping[str, Any],
    registry: FieldRegistry,
) -> LeafNode | None:
    current_def = registry.get(leaf.field)
    field_name = updates.get("field", leaf.field)
    target_def = registry.get(field_name)
    if target_def is None:
        return None

    field_changed = field_name != leaf.field
    if "operator" in updates:
        operator = updates["operator"]
        if not isinstance(operator, str) or not target_def.allows(operator):
            return None
    elif field_changed and not target_def.allows(leaf.operator):
        operator = target_def.default_operator
    else:
        operator = leaf.operator

    type_changed = field_changed and (current_def is None or current_def.type != target_def.type)
    value = leaf.value
    value2 = leaf.value2
    if type_changed:
        value = default_value_for(target_def.type)
        value2 = None
    if "value" in updates:
        value = updates["value"]
    if "value2" in updates:
        value2 = updates["value2"]
    if not is_between(operator):
        value2 = None

    try:
        return LeafNode(
            id=leaf.id,
            field=field_name,
            operator=operator,
            value=value,
            value2=value2,
        )
    except ValidationError:
        return None
