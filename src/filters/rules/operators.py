"""
Operadores e valores default por tipo de campo.

O motor não conhece a semântica dos campos; só conhece:
    - o valor inicial de uma folha conforme o tipo do campo
    - a forma canônica de cada token de operador (aliases)
"""

from __future__ import annotations

from typing import Final

from filters.types.nodes import FieldType, FilterValue

# Tipos tratados como texto em defaults, avaliação e ordenação
STRING_LIKE_TYPES: Final[frozenset[str]] = frozenset({"string", "enum", "id"})

_DEFAULT_VALUES: Final[dict[str, FilterValue]] = {
    "string": "",
    "enum": "",
    "id": "",
    "number": 0,
    "boolean": False,
    "date": None,
}

# Token (minúsculo) → operador canônico
OPERATOR_ALIASES: Final[dict[str, str]] = {
    "=": "equals",
    "==": "equals",
    "eq": "equals",
    "equals": "equals",
    "!=": "not_equals",
    "<>": "not_equals",
    "ne": "not_equals",
    "not_equals": "not_equals",
    ">": "gt",
    "gt": "gt",
    ">=": "gte",
    "gte": "gte",
    "<": "lt",
    "lt": "lt",
    "<=": "lte",
    "lte": "lte",
    "contains": "contains",
    "startswith": "startswith",
    "endswith": "endswith",
    "in": "in",
    "between": "between",
}

CANONICAL_OPERATORS: Final[frozenset[str]] = frozenset(OPERATOR_ALIASES.values())


def default_value_for(field_type: FieldType | str) -> FilterValue:
    """Valor inicial de uma folha nova para o tipo informado."""
    return _DEFAULT_VALUES.get(field_type, "")


def canonical_operator(token: str) -> str | None:
    """Retorna o operador canônico para o token, ou None se desconhecido."""
    return OPERATOR_ALIASES.get(token.strip().lower())


def is_between(token: str) -> bool:
    return canonical_operator(token) == "between"


# Valores de enum que significam "sem filtro" (opção "Todos" das telas)
ENUM_MATCH_ALL_VALUES: Final[frozenset[str]] = frozenset({"", "all"})


def is_enum_match_all(value: FilterValue) -> bool:
    """True para a opção "Todos" ou para uma condição de enum ainda sem valor."""
    if value is None:
        return True
    if isinstance(value, tuple | list):
        return False
    return str(value).strip().lower() in ENUM_MATCH_ALL_VALUES
