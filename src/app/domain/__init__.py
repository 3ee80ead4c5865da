"""Modelos de domínio das grades (estado de exibição e preferência persistida)."""

from app.domain.grid_preference import (
    PREFERENCES_PATH,
    ColumnsPreference,
    GridPreferenceDocument,
    GridPreferenceWrite,
    SortPreference,
    parse_preference_document,
)
from app.domain.view_state import VIEW_STATE_FIELDS, ViewState

__all__ = [
    "PREFERENCES_PATH",
    "VIEW_STATE_FIELDS",
    "ColumnsPreference",
    "GridPreferenceDocument",
    "GridPreferenceWrite",
    "SortPreference",
    "ViewState",
    "parse_preference_document",
]
