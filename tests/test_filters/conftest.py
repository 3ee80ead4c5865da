"""Fixtures compartilhadas dos testes da árvore de filtros."""

from __future__ import annotations

import pytest

from filters.types import FieldDef, FieldRegistry


@pytest.fixture
def balance_field() -> FieldDef:
    return FieldDef(name="balance", label="Saldo", type="number", operators=("=", ">", "<"))


@pytest.fixture
def description_field() -> FieldDef:
    return FieldDef(
        name="description",
        label="Descrição",
        type="string",
        operators=("contains", "equals"),
    )


@pytest.fixture
def registry(balance_field: FieldDef, description_field: FieldDef) -> FieldRegistry:
    return FieldRegistry(
        [
            balance_field,
            description_field,
            FieldDef(name="createdAt", type="date", operators=("equals", "between")),
            FieldDef(name="inactive", type="boolean", operators=("equals",)),
            FieldDef(name="amount", type="number", operators=("equals", "between")),
        ]
    )
