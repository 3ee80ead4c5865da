"""Testes do ResourceView: hidratação, debounce de gravação e cancelamento."""

from __future__ import annotations

import asyncio

import pytest

from app.domain.view_state import ViewState
from app.views.query_cache import QueryCache, preference_cache_key
from app.views.sync import ResourceView, use_resource_view
from config.settings import PreferenceSyncSettings
from filters.types import FieldDef, FieldRegistry
from tests.fakes.fake_preference_client import FakeGridPreferenceClient

DEBOUNCE_MS = 50
QUIET = DEBOUNCE_MS / 1000

RESOURCE = "cash_bases"


@pytest.fixture
def defaults() -> ViewState:
    return ViewState(
        visible_columns={"description": True, "balance": True, "status": True},
        columns_order=("description", "balance", "status"),
        sort_by="description",
        sort_dir="asc",
    )


@pytest.fixture
def settings() -> PreferenceSyncSettings:
    return PreferenceSyncSettings(debounce_ms=DEBOUNCE_MS)


@pytest.fixture
def registry() -> FieldRegistry:
    return FieldRegistry(
        [FieldDef(name="description", type="string", operators=("contains", "equals"))]
    )


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


async def _mount(
    client: FakeGridPreferenceClient,
    cache: QueryCache,
    defaults: ViewState,
    settings: PreferenceSyncSettings,
    registry: FieldRegistry | None = None,
) -> ResourceView:
    return await use_resource_view(
        RESOURCE, defaults, client=client, cache=cache, registry=registry, settings=settings
    )


class TestHydration:
    @pytest.mark.asyncio
    async def test_server_values_override_defaults(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient(
            {
                RESOURCE: {
                    "columns": {"visible": {"balance": False}, "order": ["status", "description"]},
                    "sort": {"by": "balance", "dir": "desc"},
                }
            }
        )

        view = await _mount(client, cache, defaults, settings)

        assert view.is_hydrated
        assert view.state.visible_columns == {"balance": False}
        assert view.state.columns_order == ("status", "description", "balance")
        assert (view.state.sort_by, view.state.sort_dir) == ("balance", "desc")
        await view.close()

    @pytest.mark.asyncio
    async def test_empty_stored_order_keeps_default_order(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient(
            {RESOURCE: {"columns": {"visible": {"balance": False}, "order": []}}}
        )

        view = await _mount(client, cache, defaults, settings)

        assert view.state.visible_columns == {"balance": False}
        assert view.state.columns_order == defaults.columns_order
        await view.close()

    @pytest.mark.asyncio
    async def test_hydration_does_not_schedule_write(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient({RESOURCE: {"sort": {"by": "balance"}}})

        view = await _mount(client, cache, defaults, settings)
        await asyncio.sleep(QUIET * 3)

        assert client.saved == []
        assert view.is_syncing is False
        await view.close()

    @pytest.mark.asyncio
    async def test_cached_read_skips_fetch(self, cache, defaults, settings) -> None:
        cache.set(preference_cache_key(RESOURCE), {"sort": {"by": "status"}})
        client = FakeGridPreferenceClient()

        view = await _mount(client, cache, defaults, settings)

        assert client.fetch_calls == []
        assert view.state.sort_by == "status"
        await view.close()

    @pytest.mark.asyncio
    async def test_read_failure_keeps_defaults(self, cache, defaults, settings, caplog) -> None:
        client = FakeGridPreferenceClient()
        client.fail_fetch = True

        view = await _mount(client, cache, defaults, settings)

        assert view.state == defaults
        assert view.load_error is not None
        assert view.is_hydrated is False
        assert any(r.getMessage() == "preference_sync_dropped" for r in caplog.records)
        await view.close()

    @pytest.mark.asyncio
    async def test_malformed_document_is_treated_as_empty(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient(
            {RESOURCE: {"columns": ["nope"], "sort": {"by": "", "dir": 3}}}
        )

        view = await _mount(client, cache, defaults, settings)

        assert view.state == defaults
        await view.close()

    @pytest.mark.asyncio
    async def test_local_edit_before_read_resolves_is_kept(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient(
            {RESOURCE: {"sort": {"by": "balance", "dir": "desc"}, "columns": {"order": ["status"]}}}
        )
        client.fetch_gate = asyncio.Event()
        view = ResourceView(RESOURCE, defaults, client=client, cache=cache, settings=settings)

        load = asyncio.create_task(view.load())
        await asyncio.sleep(0)
        assert view.is_syncing is True
        view.set_sort_dir("desc")
        view.set_sort_by("status")
        client.fetch_gate.set()
        await load

        assert view.state.sort_by == "status"
        assert view.state.columns_order == ("status", "description", "balance")
        await view.close()


    @pytest.mark.asyncio
    async def test_default_cache_follows_settings_ttl(self, defaults) -> None:
        settings = PreferenceSyncSettings(debounce_ms=DEBOUNCE_MS, cache_ttl_seconds=42)
        view = await use_resource_view(
            RESOURCE, defaults, client=FakeGridPreferenceClient(), settings=settings
        )

        assert view.cache.ttl_seconds == 42
        assert preference_cache_key(RESOURCE) in view.cache
        await view.close()

    @pytest.mark.asyncio
    async def test_edit_during_slow_read_writes_hydrated_state(
        self, cache, defaults, settings
    ) -> None:
        client = FakeGridPreferenceClient(
            {
                RESOURCE: {
                    "columns": {
                        "visible": {"balance": False},
                        "order": ["status", "balance", "description"],
                    }
                }
            }
        )
        client.fetch_gate = asyncio.Event()
        view = ResourceView(RESOURCE, defaults, client=client, cache=cache, settings=settings)

        load = asyncio.create_task(view.load())
        await asyncio.sleep(0)
        view.toggle_sort("balance")
        await asyncio.sleep(QUIET * 4)
        assert client.saved == []
        assert view.is_syncing is True

        client.fetch_gate.set()
        await load
        await view.flush()

        assert len(client.saved) == 1
        payload = client.saved[0]
        assert payload["columns"]["order"] == ["status", "balance", "description"]
        assert payload["columns"]["visible"] == {"balance": False}
        assert payload["sort"] == {"by": "balance", "dir": "asc"}
        await view.close()

    @pytest.mark.asyncio
    async def test_failed_read_releases_pending_write(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        client.fetch_gate = asyncio.Event()
        client.fail_fetch = True
        view = ResourceView(RESOURCE, defaults, client=client, cache=cache, settings=settings)

        load = asyncio.create_task(view.load())
        await asyncio.sleep(0)
        view.set_sort_by("status")
        await asyncio.sleep(QUIET * 3)
        assert client.saved == []

        client.fetch_gate.set()
        await load
        await view.flush()

        assert view.load_error is not None
        assert [p["sort"]["by"] for p in client.saved] == ["status"]
        await view.close()


class TestWriteBack:
    @pytest.mark.asyncio
    async def test_quiet_period_restarts_on_each_edit(self, cache, defaults) -> None:
        quiet = 0.2
        spacing = 0.08
        settings = PreferenceSyncSettings(debounce_ms=int(quiet * 1000))
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)

        view.set_sort_by("balance")
        await asyncio.sleep(spacing)
        view.set_sort_by("status")
        await asyncio.sleep(spacing)
        view.set_sort_dir("desc")

        # Já passou o quiet period contado da primeira edição, não da última
        await asyncio.sleep(quiet / 2)
        assert client.saved == []

        await asyncio.sleep(quiet * 1.25)
        assert len(client.saved) == 1
        assert client.saved[0]["sort"] == {"by": "status", "dir": "desc"}
        await view.close()

    @pytest.mark.asyncio
    async def test_burst_of_changes_writes_final_state_once(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)

        view.toggle_column("balance")
        view.move_column("status", -1)
        view.toggle_sort("description")
        await asyncio.sleep(QUIET / 2)
        assert client.saved == []

        await asyncio.sleep(QUIET * 4)

        assert len(client.saved) == 1
        payload = client.saved[0]
        assert payload["resource"] == RESOURCE
        assert payload["columns"]["visible"]["balance"] is False
        assert payload["columns"]["order"] == ["description", "status", "balance"]
        assert payload["sort"] == {"by": "description", "dir": "desc"}
        await view.close()

    @pytest.mark.asyncio
    async def test_successful_write_invalidates_cached_read(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)
        key = preference_cache_key(RESOURCE)
        assert key in cache

        view.set_sort_by("balance")
        await view.flush()

        assert key not in cache
        remounted = await _mount(client, cache, defaults, settings)
        assert remounted.state.sort_by == "balance"
        assert client.fetch_calls == [RESOURCE, RESOURCE]
        await view.close()
        await remounted.close()

    @pytest.mark.asyncio
    async def test_write_failure_is_dropped(self, cache, defaults, settings, caplog) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)
        client.fail_save = True

        view.set_sort_by("balance")
        await view.flush()

        assert client.saved == []
        assert view.state.sort_by == "balance"
        assert preference_cache_key(RESOURCE) in cache
        assert any(r.getMessage() == "preference_sync_dropped" for r in caplog.records)
        await view.close()

    @pytest.mark.asyncio
    async def test_sort_omitted_when_unsorted(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)

        view.set_sort_by(None)
        await view.flush()

        assert "sort" not in client.saved[0]
        await view.close()

    @pytest.mark.asyncio
    async def test_filter_edits_are_written(self, cache, defaults, settings, registry) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings, registry)

        view.add_filter()
        await view.flush()

        tree = client.saved[0]["columns"]["filtersTree"]
        assert tree["children"][0]["field"] == "description"
        await view.close()


class TestClose:
    @pytest.mark.asyncio
    async def test_close_cancels_pending_write(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)

        view.set_sort_by("balance")
        await view.close()
        await asyncio.sleep(QUIET * 3)

        assert client.saved == []

    @pytest.mark.asyncio
    async def test_closed_view_ignores_changes(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        view = await _mount(client, cache, defaults, settings)
        await view.close()

        view.set_sort_by("balance")
        await asyncio.sleep(QUIET * 3)

        assert client.saved == []
        assert view.is_syncing is False

    @pytest.mark.asyncio
    async def test_close_cancels_in_flight_write(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()
        client.save_delay_seconds = QUIET * 4
        view = await _mount(client, cache, defaults, settings)

        view.set_sort_by("balance")
        await asyncio.sleep(QUIET * 2)
        assert view.is_syncing is True
        await view.close()
        await asyncio.sleep(QUIET * 4)

        assert client.saved == []

    @pytest.mark.asyncio
    async def test_late_read_after_close_is_ignored(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient({RESOURCE: {"sort": {"by": "balance"}}})
        client.fetch_gate = asyncio.Event()
        view = ResourceView(RESOURCE, defaults, client=client, cache=cache, settings=settings)

        load = asyncio.create_task(view.load())
        await asyncio.sleep(0)
        await view.close()
        client.fetch_gate.set()
        await load

        assert view.state.sort_by == "description"
        assert view.is_hydrated is False

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self, cache, defaults, settings) -> None:
        client = FakeGridPreferenceClient()

        async with await _mount(client, cache, defaults, settings) as view:
            view.set_sort_by("balance")

        assert view.closed is True
        await asyncio.sleep(QUIET * 3)
        assert client.saved == []
