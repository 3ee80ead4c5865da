"""Testes do ViewStateStore (setters, colunas, ordenação e filtros)."""

from __future__ import annotations

import pytest

from app.domain.view_state import ViewState
from app.views.store import ViewStateChange, ViewStateStore
from filters.tree import add_leaf, clear, iter_leaves
from filters.types import FieldDef, FieldRegistry, GroupNode, LeafNode


@pytest.fixture
def registry() -> FieldRegistry:
    return FieldRegistry(
        [
            FieldDef(name="description", type="string", operators=("contains", "equals")),
            FieldDef(name="balance", type="number", operators=("=", ">", "<")),
        ]
    )


@pytest.fixture
def store(registry: FieldRegistry) -> ViewStateStore:
    defaults = ViewState(
        visible_columns={"description": True, "balance": True, "status": True},
        columns_order=("description", "balance", "status"),
        sort_by="description",
        sort_dir="asc",
    )
    return ViewStateStore(defaults, registry)


@pytest.fixture
def changes(store: ViewStateStore) -> list[ViewStateChange]:
    received: list[ViewStateChange] = []
    store.subscribe(received.append)
    return received


class TestSetters:
    def test_each_setter_notifies_changed_field(
        self, store: ViewStateStore, changes: list[ViewStateChange]
    ) -> None:
        store.set_columns_order(["balance", "description", "status"])
        store.set_sort_dir("desc")

        assert [change.fields for change in changes] == [
            frozenset({"columns_order"}),
            frozenset({"sort_dir"}),
        ]
        assert all(change.origin == "user" for change in changes)
        assert changes[-1].state == store.snapshot()

    def test_equal_value_is_not_a_change(
        self, store: ViewStateStore, changes: list[ViewStateChange]
    ) -> None:
        assert store.set_sort_by("description") is False
        assert store.set_columns_order(("description", "balance", "status")) is False
        assert changes == []

    def test_invalid_sort_dir_is_noop(self, store: ViewStateStore) -> None:
        assert store.set_sort_dir("sideways") is False
        assert store.state.sort_dir == "asc"

    def test_malformed_tree_is_rejected(self, store: ViewStateStore) -> None:
        leaf = LeafNode(id="dup", field="balance", operator="=")
        tree = GroupNode(id="root", children=(leaf, leaf))

        assert store.set_filters_tree(tree) is False

    def test_snapshot_is_immutable_value(self, store: ViewStateStore) -> None:
        before = store.snapshot()

        store.set_sort_by("balance")

        assert before.sort_by == "description"
        assert store.snapshot().sort_by == "balance"

    def test_unsubscribe_stops_notifications(self, store: ViewStateStore) -> None:
        received: list[ViewStateChange] = []
        unsubscribe = store.subscribe(received.append)

        unsubscribe()
        store.set_sort_by("balance")

        assert received == []

    def test_replace_applies_state_in_one_transition(
        self, store: ViewStateStore, changes: list[ViewStateChange]
    ) -> None:
        target = store.snapshot().model_copy(update={"sort_by": "balance", "sort_dir": "desc"})

        assert store.replace(target) is True

        assert len(changes) == 1
        assert changes[0].fields == frozenset({"sort_by", "sort_dir"})
        assert changes[0].origin == "hydration"


class TestColumns:
    def test_absent_column_counts_as_visible(self, store: ViewStateStore) -> None:
        assert store.is_column_visible("unknown") is True

    def test_toggle_column_hides_without_deleting_from_order(self, store: ViewStateStore) -> None:
        store.toggle_column("balance")

        assert store.state.visible_columns["balance"] is False
        assert store.state.columns_order == ("description", "balance", "status")
        assert store.visible_columns_in_order() == ["description", "status"]

    def test_move_column_up_and_down(self, store: ViewStateStore) -> None:
        assert store.move_column("status", -1) is True
        assert store.state.columns_order == ("description", "status", "balance")

        assert store.move_column("description", 1) is True
        assert store.state.columns_order == ("status", "description", "balance")

    @pytest.mark.parametrize(("column", "offset"), [("description", -1), ("status", 1), ("nope", 1)])
    def test_move_out_of_bounds_is_noop(
        self, store: ViewStateStore, column: str, offset: int
    ) -> None:
        assert store.move_column(column, offset) is False


class TestToggleSort:
    def test_new_column_sorts_ascending(self, store: ViewStateStore) -> None:
        store.set_sort_dir("desc")

        store.toggle_sort("balance")

        assert (store.state.sort_by, store.state.sort_dir) == ("balance", "asc")

    def test_current_column_flips_direction(self, store: ViewStateStore) -> None:
        store.toggle_sort("description")
        assert store.state.sort_dir == "desc"

        store.toggle_sort("description")
        assert store.state.sort_dir == "asc"


class TestFilters:
    def test_add_filter_uses_first_field_by_default(self, store: ViewStateStore) -> None:
        assert store.add_filter() is True

        leaf = next(iter_leaves(store.state.filters_tree))
        assert leaf.field == "description"
        assert leaf.operator == "contains"

    def test_add_filter_unknown_field_is_noop(self, store: ViewStateStore) -> None:
        assert store.add_filter(field="missing") is False

    def test_update_and_remove_filter(self, store: ViewStateStore) -> None:
        store.add_filter(field="balance")
        leaf_id = next(iter_leaves(store.state.filters_tree)).id

        assert store.update_filter(leaf_id, {"operator": ">", "value": 10}) is True
        assert next(iter_leaves(store.state.filters_tree)).value == 10
        assert store.update_filter(leaf_id, {"operator": "between"}) is False

        assert store.remove_filter(leaf_id) is True
        assert store.state.filters_tree.children == ()

    def test_group_and_logical(self, store: ViewStateStore) -> None:
        store.add_filter_group(logical="OR")
        group = store.state.filters_tree.children[0]

        assert store.add_filter(group.id, "balance") is True
        assert store.set_filter_logical(group.id, "AND") is True
        assert store.set_filter_logical(group.id, "AND") is False

    def test_clear_filters(self, store: ViewStateStore, changes: list[ViewStateChange]) -> None:
        assert store.clear_filters() is False

        store.add_filter()
        assert store.clear_filters() is True
        assert store.state.filters_tree.children == ()
        assert changes[-1].fields == frozenset({"filters_tree"})

    def test_set_filters_tree_accepts_engine_output(self, store: ViewStateStore) -> None:
        balance = FieldDef(name="balance", type="number", operators=("=",))
        tree = clear()
        tree = add_leaf(tree, tree.id, balance)

        assert store.set_filters_tree(tree) is True
        assert store.state.filters_tree is tree
