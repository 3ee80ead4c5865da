"""Testes do comparador tipado e da ordenação estável."""

from __future__ import annotations

import itertools

import pytest

from filters.sorting import compare, compare_values, sort_rows

SAMPLES = [None, "b", "a", "Árvore", "arvore", "", "10", "9"]


def _sorted(values: list, direction: str = "asc", field_type: str = "string") -> list:
    rows = [{"v": value} for value in values]
    return [row["v"] for row in sort_rows(rows, "v", direction, field_type)]  # type: ignore[arg-type]


class TestNullOrdering:
    def test_nulls_first_ascending_last_descending(self) -> None:
        assert _sorted([None, "b", "a"]) == [None, "a", "b"]
        assert _sorted([None, "b", "a"], "desc") == ["b", "a", None]

    def test_absent_field_counts_as_null(self) -> None:
        assert compare({}, {"v": "a"}, "v") == -1
        assert compare({}, {}, "v") == 0


class TestNumbers:
    def test_numeric_strings_sort_numerically(self) -> None:
        values = [None, "100.00", "20.50"]

        assert _sorted(values, field_type="number") == [None, "20.50", "100.00"]
        assert _sorted(values, "desc", "number") == ["100.00", "20.50", None]

    def test_unparseable_number_counts_as_null(self) -> None:
        assert compare_values("abc", 1, field_type="number") == -1
        assert compare_values(float("nan"), None, field_type="number") == 0


class TestText:
    def test_accent_and_case_folded(self) -> None:
        assert _sorted(["Banco", "Árvore", "caixa"]) == ["Árvore", "Banco", "caixa"]

    def test_raw_text_breaks_ties(self) -> None:
        assert compare_values("arvore", "Árvore") != 0

    def test_booleans_compare_as_labels(self) -> None:
        assert _sorted([True, False], field_type="boolean") == [False, True]


class TestDates:
    def test_iso_dates(self) -> None:
        values = ["2024-03-11", None, "2024-03-10T23:59:00Z", "not a date"]

        assert _sorted(values, field_type="date") == [
            None,
            "not a date",
            "2024-03-10T23:59:00Z",
            "2024-03-11",
        ]


class TestProperties:
    @pytest.mark.parametrize("field_type", ["string", "number"])
    def test_antisymmetry_and_reflexivity(self, field_type: str) -> None:
        for a, b in itertools.product(SAMPLES, repeat=2):
            asc = compare_values(a, b, "asc", field_type)
            assert asc == -compare_values(a, b, "desc", field_type)
            assert asc == -compare_values(b, a, "asc", field_type)
        for a in SAMPLES:
            assert compare_values(a, a, "asc", field_type) == 0

    def test_sort_is_stable(self) -> None:
        rows = [{"k": "x", "n": 1}, {"k": "a", "n": 2}, {"k": "x", "n": 3}, {"k": "a", "n": 4}]

        result = sort_rows(rows, "k")

        assert [row["n"] for row in result] == [2, 4, 1, 3]

    def test_without_field_keeps_source_order(self) -> None:
        rows = [{"k": 2}, {"k": 1}]

        assert sort_rows(rows, None) == rows
