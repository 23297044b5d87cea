"""
Catalog sync: connect / demo / disconnect and the reconcile pass.

Every reconcile captures a generation token before it starts its two Clover
requests. The token moves forward when a newer reconcile starts, on disconnect,
and when auto refresh goes idle while its own request is the newest one. A
response whose token is no longer current is dropped instead of merged; a
manual refresh survives auto refresh being switched off.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Tuple

from core.clover_client import CloverApiClient, CloverApiError, CloverConfig
from core.demo_data import build_demo_store
from core.scheduler import PollingScheduler
from db.state import AppState, get_app_state
from schemas.sync import SyncResult

logger = logging.getLogger(__name__)


class SyncFailedError(RuntimeError):
    pass


class NotConnectedError(RuntimeError):
    pass


class CatalogSync:
    def __init__(
        self,
        state: AppState,
        client_factory: Callable[[CloverConfig], CloverApiClient] = CloverApiClient,
        scheduler: PollingScheduler = None,
    ):
        self.state = state
        self._client_factory = client_factory
        self._generation = 0
        self._scheduled_token = None
        self._in_flight = 0
        self.scheduler = scheduler or PollingScheduler(self._scheduled_tick, on_deactivate=self.drop_scheduled)

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Make every in-flight response stale."""
        self._generation += 1

    def drop_scheduled(self) -> None:
        """Auto refresh went idle: drop its request if it is still the newest one."""
        if self._scheduled_token == self._generation:
            self.invalidate()

    async def _scheduled_tick(self) -> SyncResult:
        return await self.reconcile(silent=True, scheduled=True)

    async def fetch_snapshot(self, config: CloverConfig) -> Tuple[List[Dict], List[Dict]]:
        client = self._client_factory(config)
        # Both calls run together; if either fails the whole snapshot fails.
        items, categories = await asyncio.gather(
            asyncio.to_thread(client.fetch_items),
            asyncio.to_thread(client.fetch_categories),
        )
        return items, categories

    def _result(self, status: str, message: str) -> SyncResult:
        return SyncResult(
            status=status,
            message=message,
            item_count=len(self.state.items),
            category_count=len(self.state.categories),
            last_synced=self.state.last_synced,
        )

    async def reconcile(self, silent: bool = False, scheduled: bool = False) -> SyncResult:
        if self.state.demo_mode:
            self.state.last_synced = datetime.now()
            return self._result("demo", "Demo mode has no live sync")

        config = self.state.pos_config
        if not self.state.connected or config is None:
            if silent:
                return self._result("failed", "Not connected to Clover")
            raise NotConnectedError("Not connected to Clover")

        self._generation += 1
        token = self._generation
        if scheduled:
            self._scheduled_token = token
        self._in_flight += 1
        self.state.syncing = True
        try:
            items, categories = await self.fetch_snapshot(config)
        except CloverApiError as e:
            if token != self._generation:
                logger.info("superseded catalog request failed: %s", e)
                return self._result("discarded", "Catalog request was superseded by a newer one")
            if silent:
                logger.warning("background sync failed: %s", e)
                return self._result("failed", f"Sync failed: {e}")
            raise SyncFailedError(f"Sync failed: {e}") from e
        finally:
            self._in_flight -= 1
            self.state.syncing = self._in_flight > 0

        if token != self._generation:
            logger.info("discarding stale catalog response (token %s, current %s)", token, self._generation)
            return self._result("discarded", "Catalog response arrived after a newer request and was dropped")

        self.state.apply_catalog(items, categories)
        logger.info("catalog merged: %d items, %d categories", len(self.state.items), len(self.state.categories))
        return self._result("merged", "Synced with Clover")

    async def connect(self, config: CloverConfig) -> SyncResult:
        self._generation += 1
        token = self._generation
        try:
            items, categories = await self.fetch_snapshot(config)
        except CloverApiError as e:
            if token != self._generation:
                return self._result("discarded", "Connection superseded by a newer request")
            logger.warning("connect failed: %s", e)
            raise SyncFailedError(f"Connection failed: {e}") from e

        if token != self._generation:
            return self._result("discarded", "Connection superseded by a newer request")

        self.state.mark_connected(config)
        self.state.apply_catalog(items, categories)
        self.scheduler.set_connected(True)
        logger.info("connected to merchant %s (sandbox=%s)", config.merchant_id, config.sandbox)
        return self._result("merged", "Connected to Clover")

    def load_demo(self) -> SyncResult:
        self.invalidate()
        items, categories, vendors = build_demo_store()
        self.state.load_snapshot(items, categories, vendors)
        self.state.mark_connected(None, demo=True)
        self.scheduler.set_connected(True)
        return self._result("demo", "Started in demo mode")

    def disconnect(self) -> None:
        self.invalidate()
        self.scheduler.set_connected(False)
        self.state.mark_disconnected()

    def status(self) -> Dict:
        config = self.state.pos_config
        return {
            "connected": self.state.connected,
            "demo_mode": self.state.demo_mode,
            "syncing": self.state.syncing,
            "last_synced": self.state.last_synced,
            "sandbox": config.sandbox if config else None,
            "merchant_id": config.merchant_id if config else None,
            "scheduler_state": self.scheduler.state,
            "auto_refresh": self.scheduler.auto_refresh,
            "interval": self.scheduler.interval,
            "countdown": self.scheduler.countdown,
        }


_catalog_sync = None


def get_catalog_sync() -> CatalogSync:
    global _catalog_sync
    if _catalog_sync is None:
        _catalog_sync = CatalogSync(get_app_state())
    return _catalog_sync
