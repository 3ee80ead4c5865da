"""
Comparador tipado para ordenação de grades.

Precedência das regras:
    1. ambos nulos → iguais
    2. um nulo → nulo primeiro em "asc", por último em "desc"
    3. number (inclusive texto numérico, ex: saldo "100.00") → float;
       não numérico conta como nulo
    4. date → datetime ISO; não parseável conta como nulo
    5. demais tipos → comparação textual sensível a idioma (sem acento,
       sem caixa; o texto original desempata)
    6. "desc" inverte o resultado

A direção só inverte o sinal final, então compare(a, b, asc) == -compare(a, b, desc)
vale para qualquer par, inclusive com nulos.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, Literal, TypeVar

from filters.rules.evaluation import to_float

SortDir = Literal["asc", "desc"]

RowT = TypeVar("RowT", bound=Mapping[str, Any])


def _collation_key(text: str) -> tuple[str, str]:
    lowered = text.casefold()
    folded = "".join(
        ch for ch in unicodedata.normalize("NFKD", lowered) if not unicodedata.combining(ch)
    )
    return folded, text


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) if value.tzinfo is not None else value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None) if parsed.tzinfo is not None else parsed


def _label(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _coerce(value: Any, field_type: str) -> Any:
    """Normaliza o valor para o tipo de comparação; None representa nulo."""
    if value is None:
        return None
    if field_type == "number":
        return to_float(value)
    if field_type == "date":
        return _to_datetime(value)
    return _collation_key(_label(value))


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_values(
    a: Any,
    b: Any,
    direction: SortDir = "asc",
    field_type: str = "string",
) -> int:
    """Compara dois valores crus; retorna -1, 0 ou 1."""
    left = _coerce(a, field_type)
    right = _coerce(b, field_type)
    if left is None and right is None:
        result = 0
    elif left is None:
        result = -1
    elif right is None:
        result = 1
    else:
        result = _sign(left, right)
    return -result if direction == "desc" else result


def compare(
    a: Mapping[str, Any],
    b: Mapping[str, Any],
    field: str,
    direction: SortDir = "asc",
    field_type: str = "string",
) -> int:
    """Compara duas linhas pelo campo ``field``. Campo ausente conta como nulo."""
    return compare_values(a.get(field), b.get(field), direction, field_type)


def sort_rows(
    rows: Iterable[RowT],
    field: str | None,
    direction: SortDir = "asc",
    field_type: str = "string",
) -> list[RowT]:
    """Ordena de forma estável; sem ``field`` devolve a ordem original."""
    items = list(rows)
    if not field:
        return items
    key = cmp_to_key(lambda a, b: compare(a, b, field, direction, field_type))
    return sorted(items, key=key)
