"""
Modelo de nós da árvore de filtros.

A árvore é uma união discriminada por ``kind``:
    - GroupNode: grupo lógico (AND/OR) com filhos ordenados
    - LeafNode: condição sobre um campo do registro da tela

Nós são imutáveis (pydantic frozen). Toda alteração produz uma nova árvore,
reconstruída apenas no caminho raiz → nó alterado (ver filters.tree).

Formato de fio (JSON):
    {"id": "...", "kind": "group", "logical": "AND", "children": [...]}
    {"id": "...", "kind": "leaf", "field": "balance", "operator": "=", "value": 0}
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Iterator, Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

Logical = Literal["AND", "OR"]
FieldType = Literal["string", "number", "boolean", "date", "enum", "id"]
FilterValue = Union[str, int, float, bool, tuple[str, ...], None]

LOGICAL_VALUES: frozenset[str] = frozenset({"AND", "OR"})


def new_node_id() -> str:
    """Gera id único para um nó recém-criado."""
    return uuid.uuid4().hex


class EnumOption(BaseModel):
    """Opção de um campo enumerado (valor + rótulo de exibição)."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str = ""


class FieldDef(BaseModel):
    """Campo filtrável declarado pela tela.

    Attributes:
        name: Chave do campo na linha (ex: "balance")
        label: Rótulo de exibição
        type: Tipo de dado (define default de valor, avaliação e ordenação)
        operators: Operadores permitidos, em ordem; o primeiro é o default
        enum_values: Opções quando type == "enum"
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    label: str = ""
    type: FieldType = "string"
    operators: tuple[str, ...] = Field(min_length=1)
    enum_values: tuple[EnumOption, ...] = Field(default=(), alias="enumValues")

    @property
    def default_operator(self) -> str:
        return self.operators[0]

    def allows(self, operator: str) -> bool:
        return operator in self.operators


class FieldRegistry:
    """Registro ordenado de FieldDefs de uma tela, indexado por nome."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Iterable[FieldDef | Mapping[str, Any]] = ()) -> None:
        parsed: dict[str, FieldDef] = {}
        for item in fields:
            field_def = item if isinstance(item, FieldDef) else FieldDef.model_validate(item)
            parsed[field_def.name] = field_def
        self._fields = parsed

    def get(self, name: str) -> FieldDef | None:
        return self._fields.get(name)

    def first(self) -> FieldDef | None:
        return next(iter(self._fields.values()), None)

    def names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldDef]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldRegistry({list(self._fields)!r})"


class LeafNode(BaseModel):
    """Condição folha: ``field operator value``.

    ``value2`` só é usado como limite superior do operador ``between``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    kind: Literal["leaf"] = "leaf"
    field: str
    operator: str
    value: FilterValue = None
    value2: FilterValue = None


class GroupNode(BaseModel):
    """Grupo lógico: combina os filhos com AND ou OR."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    kind: Literal["group"] = "group"
    logical: Logical = "AND"
    children: tuple[FilterNode, ...] = ()


FilterNode = Annotated[Union[GroupNode, LeafNode], Field(discriminator="kind")]

GroupNode.model_rebuild()


def _normalize_legacy(raw: Any) -> Any:
    """Converte o formato antigo (type="cond", op) para o atual (kind="leaf", operator)."""
    if not isinstance(raw, Mapping):
        return raw
    node = dict(raw)
    legacy_type = node.pop("type", None)
    if "kind" not in node and legacy_type is not None:
        node["kind"] = "leaf" if legacy_type == "cond" else legacy_type
    if "operator" not in node and "op" in node:
        node["operator"] = node.pop("op")
    if isinstance(node.get("children"), list):
        node["children"] = [_normalize_legacy(child) for child in node["children"]]
    return node


def parse_tree(raw: Any) -> GroupNode | None:
    """Valida documento JSON de árvore de filtros.

    Aceita o formato legado. Retorna None quando o documento é inválido,
    quando a raiz não é um grupo ou quando há ids duplicados.
    """
    if isinstance(raw, GroupNode):
        tree = raw
    else:
        if not isinstance(raw, Mapping):
            return None
        try:
            tree = GroupNode.model_validate(_normalize_legacy(raw))
        except ValidationError as exc:
            logger.warning(
                "filter_tree_invalid",
                extra={
                    "component": "filter_tree",
                    "action": "parse",
                    "result": "invalid",
                    "error_count": exc.error_count(),
                },
            )
            return None

    seen: set[str] = set()
    stack: list[GroupNode | LeafNode] = [tree]
    while stack:
        node = stack.pop()
        if node.id in seen:
            logger.warning(
                "filter_tree_duplicate_id",
                extra={"component": "filter_tree", "action": "parse", "result": "invalid"},
            )
            return None
        seen.add(node.id)
        if isinstance(node, GroupNode):
            stack.extend(node.children)
    return tree


def dump_tree(tree: GroupNode) -> dict[str, Any]:
    """Serializa a árvore para o formato JSON de fio."""
    return tree.model_dump(mode="json")
