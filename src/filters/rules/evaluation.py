"""
Avaliação da árvore de filtros sobre linhas (mappings).

Usado pelas telas que filtram no cliente e pelos backends em memória.
Regras:
    - grupo vazio aceita tudo; AND = todos os filhos, OR = algum filho
    - o tipo do campo vem do registro; sem registro, é inferido do valor da folha
    - operador desconhecido não exclui a linha
    - enum com "all" ou sem valor (equals) aceita tudo
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, TypeVar

from filters.rules.operators import STRING_LIKE_TYPES, canonical_operator, is_enum_match_all
from filters.types.nodes import FieldRegistry, FilterValue, GroupNode, LeafNode, dump_tree

RowT = TypeVar("RowT", bound=Mapping[str, Any])

_TRUE_LABELS = frozenset({"true", "1", "yes", "sim"})
_FALSE_LABELS = frozenset({"false", "0", "no", "nao", "não"})


def matches_tree(
    row: Mapping[str, Any],
    node: GroupNode | LeafNode,
    registry: FieldRegistry | None = None,
) -> bool:
    """Retorna True se a linha satisfaz o nó (grupo ou folha)."""
    if isinstance(node, LeafNode):
        return _matches_leaf(row, node, registry)
    if not node.children:
        return True
    results = (matches_tree(row, child, registry) for child in node.children)
    return any(results) if node.logical == "OR" else all(results)


def filter_rows(
    rows: Iterable[RowT],
    tree: GroupNode,
    registry: FieldRegistry | None = None,
) -> list[RowT]:
    """Filtra as linhas preservando a ordem de entrada."""
    return [row for row in rows if matches_tree(row, tree, registry)]


def tree_to_query_param(tree: GroupNode) -> str | None:
    """JSON compacto para o parâmetro ``filtersTree``; None quando a árvore é vazia."""
    if not tree.children:
        return None
    return json.dumps(dump_tree(tree), separators=(",", ":"), ensure_ascii=False)


def _field_type(leaf: LeafNode, registry: FieldRegistry | None) -> str:
    field_def = registry.get(leaf.field) if registry is not None else None
    if field_def is not None:
        return field_def.type
    if isinstance(leaf.value, bool):
        return "boolean"
    if isinstance(leaf.value, int | float):
        return "number"
    return "string"


def _matches_leaf(row: Mapping[str, Any], leaf: LeafNode, registry: FieldRegistry | None) -> bool:
    operator = canonical_operator(leaf.operator)
    if operator is None:
        return True
    field_type = _field_type(leaf, registry)
    actual = row.get(leaf.field)

    if field_type == "number":
        return _match_number(actual, operator, leaf.value, leaf.value2)
    if field_type == "boolean":
        return _match_boolean(actual, operator, leaf.value)
    if field_type == "enum" and operator == "equals" and is_enum_match_all(leaf.value):
        return True
    if field_type == "date":
        return _match_date(actual, operator, leaf.value, leaf.value2)
    if field_type in STRING_LIKE_TYPES:
        return _match_text(actual, operator, leaf.value)
    return True


def _negated(operator: str, missing: bool, outcome: bool) -> bool:
    if operator == "not_equals":
        return missing or not outcome
    return not missing and outcome


def to_float(value: Any) -> float | None:
    """Converte para float; None para vazio, não numérico ou NaN."""
    if value is None or isinstance(value, tuple | list | dict):
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return None if math.isnan(number) else number


def _match_number(actual: Any, operator: str, value: FilterValue, value2: FilterValue) -> bool:
    number = to_float(actual)
    if operator == "in":
        options = {to_float(item) for item in _as_list(value)}
        return number is not None and number in options
    low = to_float(value)
    if operator == "between":
        high = to_float(value2)
        if number is None or low is None or high is None:
            return False
        return low <= number <= high
    if operator in ("equals", "not_equals"):
        missing = number is None or low is None
        return _negated(operator, missing, not missing and number == low)
    if number is None or low is None:
        return False
    comparisons = {
        "gt": number > low,
        "gte": number >= low,
        "lt": number < low,
        "lte": number <= low,
    }
    return comparisons.get(operator, True)


def to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    label = str(value).strip().lower()
    if label in _TRUE_LABELS:
        return True
    if label in _FALSE_LABELS:
        return False
    return None


def _match_boolean(actual: Any, operator: str, value: FilterValue) -> bool:
    if operator not in ("equals", "not_equals"):
        return True
    expected = to_bool(value)
    if expected is None:
        return True
    current = bool(actual) if not isinstance(actual, str) else bool(to_bool(actual))
    outcome = current == expected
    return outcome if operator == "equals" else not outcome


def to_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _match_date(actual: Any, operator: str, value: FilterValue, value2: FilterValue) -> bool:
    day = to_date(actual)
    if operator == "between":
        start, end = to_date(value), to_date(value2)
        if day is None or start is None or end is None:
            return False
        return start <= day <= end
    expected = to_date(value)
    if operator == "equals" and expected is None:
        return True
    if operator in ("equals", "not_equals"):
        missing = day is None or expected is None
        return _negated(operator, missing, not missing and day == expected)
    if day is None or expected is None:
        return False
    comparisons = {
        "gt": day > expected,
        "gte": day >= expected,
        "lt": day < expected,
        "lte": day <= expected,
    }
    return comparisons.get(operator, True)


def _as_list(value: FilterValue) -> list[str]:
    if isinstance(value, tuple | list):
        return [str(item).strip() for item in value]
    if value is None:
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _match_text(actual: Any, operator: str, value: FilterValue) -> bool:
    missing = actual is None
    text = "" if missing else str(actual).lower()
    if operator == "in":
        options = {item.lower() for item in _as_list(value)}
        return not missing and text in options
    expected = "" if value is None else str(value).lower()
    if operator in ("equals", "not_equals"):
        return _negated(operator, missing, text == expected)
    if missing:
        return False
    comparisons = {
        "contains": expected in text,
        "startswith": text.startswith(expected),
        "endswith": text.endswith(expected),
        "gt": text > expected,
        "gte": text >= expected,
        "lt": text < expected,
        "lte": text <= expected,
    }
    return comparisons.get(operator, True)
