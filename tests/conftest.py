import threading
from datetime import date
from typing import Dict, List, Optional

import pytest

from core.clover_client import CloverApiError, CloverConfig
from core.scheduler import PollingScheduler
from core.sync import CatalogSync
from db.inventory import CostEntry, DeliveryRecord, Item, SaleRecord
from db.state import AppState


async def _noop():
    return None


class FakeCloverClient:
    """Stands in for CloverApiClient; `gate` lets a test hold fetch_items mid-flight."""

    def __init__(self, items: Optional[List[Dict]] = None, categories: Optional[List[Dict]] = None):
        self.items = items or []
        self.categories = categories or []
        self.fail_items: Optional[str] = None
        self.fail_categories: Optional[str] = None
        self.gate: Optional[threading.Event] = None
        self.started = threading.Event()
        self.configs: List[CloverConfig] = []

    def __call__(self, config: CloverConfig) -> "FakeCloverClient":
        self.configs.append(config)
        return self

    def fetch_items(self) -> List[Dict]:
        self.started.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.fail_items:
            raise CloverApiError(self.fail_items)
        return list(self.items)

    def fetch_categories(self) -> List[Dict]:
        if self.fail_categories:
            raise CloverApiError(self.fail_categories)
        return list(self.categories)


def make_item(**overrides) -> Item:
    defaults = dict(id="x", name="Whole Milk 1L", sku="MLK001", price=3.99, cost=2.10, quantity=5)
    defaults.update(overrides)
    return Item(**defaults)


@pytest.fixture
def state() -> AppState:
    return AppState()


@pytest.fixture
def fake_clover() -> FakeCloverClient:
    return FakeCloverClient(
        items=[
            {"id": "x", "name": "Whole Milk 1L", "price": 399, "quantity": 9,
             "categories": {"elements": [{"id": "cat2"}]}},
            {"id": "y", "name": "Sourdough Bread", "price": 650, "quantity": 3, "sku": "BRD002", "code": "987"},
        ],
        categories=[{"id": "cat2", "name": "Dairy"}, {"id": "cat3", "name": "Bakery"}],
    )


@pytest.fixture
def catalog_sync(state, fake_clover) -> CatalogSync:
    # Auto refresh off so tests never leave timer tasks behind.
    return CatalogSync(state, client_factory=fake_clover, scheduler=PollingScheduler(_noop, auto_refresh=False))


@pytest.fixture
def stocked_item() -> Item:
    return make_item(
        sales_history=[SaleRecord(date=date(2025, 2, 1), qty=8, revenue=31.92)],
        delivery_history=[
            DeliveryRecord(id="d1", date=date(2025, 1, 15), qty=48, vendor_id="ven3", unit_cost=2.00, total_cost=96.00),
        ],
        cost_history=[CostEntry(date=date(2025, 1, 15), cost=2.00), CostEntry(date=date(2025, 2, 1), cost=2.10)],
    )
