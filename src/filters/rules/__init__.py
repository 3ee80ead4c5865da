"""Operadores e avaliação de árvores de filtros sobre linhas."""

from filters.rules.evaluation import filter_rows, matches_tree, tree_to_query_param
from filters.rules.operators import (
    CANONICAL_OPERATORS,
    OPERATOR_ALIASES,
    canonical_operator,
    default_value_for,
)

__all__ = [
    "CANONICAL_OPERATORS",
    "OPERATOR_ALIASES",
    "canonical_operator",
    "default_value_for",
    "filter_rows",
    "matches_tree",
    "tree_to_query_param",
]
