"""Percurso em profundidade da árvore de filtros (somente leitura)."""

from __future__ import annotations

from collections.abc import Iterator

from filters.types.nodes import GroupNode, LeafNode


def iter_nodes(tree: GroupNode) -> Iterator[GroupNode | LeafNode]:
    """Percorre a árvore em pré-ordem, respeitando a ordem dos filhos."""
    yield tree
    for child in tree.children:
        if isinstance(child, GroupNode):
            yield from iter_nodes(child)
        else:
            yield child


def iter_leaves(tree: GroupNode) -> Iterator[LeafNode]:
    """Achata a árvore nas suas condições folha, em ordem de exibição."""
    for node in iter_nodes(tree):
        if isinstance(node, LeafNode):
            yield node


def find_node(tree: GroupNode, node_id: str) -> GroupNode | LeafNode | None:
    for node in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


def node_ids(tree: GroupNode) -> list[str]:
    return [node.id for node in iter_nodes(tree)]


def is_well_formed(tree: object) -> bool:
    """Raiz é grupo e todos os ids são únicos."""
    if not isinstance(tree, GroupNode):
        return False
    ids = node_ids(tree)
    return len(ids) == len(set(ids))
