"""
Tests for core.sync: connect, reconcile, failures and stale-response guard.
"""

import asyncio
import threading

import pytest

from core.clover_client import CloverConfig
from core.sync import CatalogSync, NotConnectedError, SyncFailedError
from db.inventory import SaleRecord


CONFIG = CloverConfig(token="tok", merchant_id="M123", sandbox=True)


class TestConnect:
    def test_connect_loads_catalog(self, catalog_sync, state, fake_clover):
        result = asyncio.run(catalog_sync.connect(CONFIG))

        assert result.status == "merged"
        assert state.connected and not state.demo_mode
        assert state.pos_config == CONFIG
        assert [i.id for i in state.items] == ["x", "y"]
        assert state.get_item("x").price == pytest.approx(3.99)
        assert state.get_item("x").category_id == "cat2"
        assert [c.name for c in state.categories] == ["Dairy", "Bakery"]
        assert state.last_synced is not None
        assert fake_clover.configs == [CONFIG]

    def test_connect_failure_leaves_state_untouched(self, catalog_sync, state, fake_clover):
        fake_clover.fail_categories = "Clover API error: 401"

        with pytest.raises(SyncFailedError, match="401"):
            asyncio.run(catalog_sync.connect(CONFIG))
        assert not state.connected
        assert state.items == ()
        assert state.pos_config is None


class TestReconcile:
    def _connect(self, catalog_sync):
        asyncio.run(catalog_sync.connect(CONFIG))

    def test_reconcile_preserves_local_history(self, catalog_sync, state, fake_clover):
        self._connect(catalog_sync)
        sale = SaleRecord(date=state.last_synced.date(), qty=1, revenue=3.99)
        state.get_item("x").sales_history.append(sale)
        fake_clover.items[0] = dict(fake_clover.items[0], quantity=20, price=449)

        result = asyncio.run(catalog_sync.reconcile())

        item = state.get_item("x")
        assert result.status == "merged"
        assert item.quantity == 20
        assert item.price == pytest.approx(4.49)
        assert item.sales_history == [sale]

    def test_non_silent_failure_raises(self, catalog_sync, state, fake_clover):
        self._connect(catalog_sync)
        before = [i.quantity for i in state.items]
        fake_clover.fail_items = "Clover API error: 500"

        with pytest.raises(SyncFailedError):
            asyncio.run(catalog_sync.reconcile(silent=False))
        assert [i.quantity for i in state.items] == before
        assert state.syncing is False

    def test_silent_failure_is_reported_as_result(self, catalog_sync, state, fake_clover):
        self._connect(catalog_sync)
        fake_clover.fail_items = "Clover API error: 500"

        result = asyncio.run(catalog_sync.reconcile(silent=True))
        assert result.status == "failed"
        assert len(state.items) == 2

    def test_refresh_requires_connection(self, catalog_sync):
        with pytest.raises(NotConnectedError):
            asyncio.run(catalog_sync.reconcile())
        assert asyncio.run(catalog_sync.reconcile(silent=True)).status == "failed"

    def test_stale_response_is_discarded(self, catalog_sync, state, fake_clover):
        self._connect(catalog_sync)
        fake_clover.items = [{"id": "z", "name": "Late item", "price": 100, "quantity": 1}]
        fake_clover.gate = threading.Event()
        fake_clover.started.clear()

        async def scenario():
            task = asyncio.create_task(catalog_sync.reconcile(silent=True))
            await asyncio.to_thread(fake_clover.started.wait, 5)
            catalog_sync.disconnect()
            fake_clover.gate.set()
            return await task

        result = asyncio.run(scenario())

        assert result.status == "discarded"
        assert [i.id for i in state.items] == ["x", "y"]
        assert not state.connected

    def test_demo_mode_does_not_fetch(self, catalog_sync, state, fake_clover):
        async def scenario():
            catalog_sync.load_demo()
            return await catalog_sync.reconcile(silent=False)

        result = asyncio.run(scenario())

        assert result.status == "demo"
        assert state.demo_mode
        assert fake_clover.configs == []
        assert len(state.vendors) == 3


class TestDisconnect:
    def test_disconnect_keeps_local_data(self, catalog_sync, state):
        asyncio.run(catalog_sync.connect(CONFIG))
        generation = catalog_sync.generation

        catalog_sync.disconnect()

        assert not state.connected
        assert len(state.items) == 2
        assert catalog_sync.generation > generation


class TestSupersededRequests:
    def test_failure_of_superseded_request_is_discarded(self, catalog_sync, state, fake_clover):
        asyncio.run(catalog_sync.connect(CONFIG))
        fake_clover.fail_items = "Clover API error: 500"
        fake_clover.gate = threading.Event()
        fake_clover.started.clear()

        async def scenario():
            older = asyncio.create_task(catalog_sync.reconcile(silent=False))
            await asyncio.to_thread(fake_clover.started.wait, 5)
            newer = asyncio.create_task(catalog_sync.reconcile(silent=True))
            await asyncio.sleep(0)
            fake_clover.gate.set()
            return await older, await newer

        older, newer = asyncio.run(scenario())

        assert older.status == "discarded"
        assert newer.status == "failed"
        assert state.syncing is False


class TestAutoRefreshToggle:
    def _gated_scenario(self, state, fake_clover, scheduled):
        sync = CatalogSync(state, client_factory=fake_clover)
        sync.scheduler.auto_refresh = True

        async def scenario():
            await sync.connect(CONFIG)
            active = sync.scheduler.state
            fake_clover.items = [dict(fake_clover.items[0], quantity=20)]
            fake_clover.gate = threading.Event()
            fake_clover.started.clear()

            task = asyncio.create_task(sync.reconcile(silent=not scheduled, scheduled=scheduled))
            await asyncio.to_thread(fake_clover.started.wait, 5)
            sync.scheduler.set_auto_refresh(False)
            fake_clover.gate.set()
            result = await task
            await sync.scheduler.aclose()
            return active, result

        return asyncio.run(scenario())

    def test_manual_refresh_survives_auto_refresh_off(self, state, fake_clover):
        active, result = self._gated_scenario(state, fake_clover, scheduled=False)

        assert active == "active"
        assert result.status == "merged"
        assert state.get_item("x").quantity == 20
        assert state.syncing is False
        assert state.connected

    def test_scheduled_refresh_dropped_when_auto_refresh_off(self, state, fake_clover):
        _, result = self._gated_scenario(state, fake_clover, scheduled=True)

        assert result.status == "discarded"
        assert state.get_item("x").quantity == 9
        assert state.syncing is False


class TestCountdown:
    def test_manual_refresh_leaves_countdown_alone(self, catalog_sync, fake_clover):
        asyncio.run(catalog_sync.connect(CONFIG))
        for _ in range(3):
            catalog_sync.scheduler.tick_countdown()
        before = catalog_sync.scheduler.countdown

        result = asyncio.run(catalog_sync.reconcile(silent=False))

        assert result.status == "merged"
        assert catalog_sync.scheduler.countdown == before == catalog_sync.scheduler.interval - 3
