"""Ordenação tipada e estável de linhas de grade."""

from filters.sorting.comparator import SortDir, compare, compare_values, sort_rows

__all__ = [
    "SortDir",
    "compare",
    "compare_values",
    "sort_rows",
]
