"""
Application state: the single in-memory aggregate behind the dashboard.

Nothing is persisted; a restart starts from an empty (disconnected) state.
Every mutation goes through a method on AppState. Readers get tuples, never
the underlying lists.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

from core.clover_client import CloverConfig
from core.ids import timestamp_id
from core import ledger
from core.reconcile import merge_catalog, merge_categories
from db.category import Category
from db.inventory import CostEntry, DeliveryRecord, Item, SaleRecord
from db.vendor import Vendor
from schemas.categories import CategoryCreate
from schemas.inventory import (
    DeliveryCreate,
    ItemCreate,
    ItemUpdate,
    SaleCreate,
    StockAdjustmentCreate,
)
from schemas.vendors import VendorCreate, VendorUpdate

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    pass


class AppState:
    def __init__(self) -> None:
        self._items: List[Item] = []
        self._vendors: List[Vendor] = []
        self._categories: List[Category] = []

        self.connected = False
        self.demo_mode = False
        self.syncing = False
        self.last_synced: Optional[datetime] = None
        # Clover credentials, memory only.
        self.pos_config: Optional[CloverConfig] = None

    # ----------------------------
    # Read-only views
    # ----------------------------

    @property
    def items(self) -> Tuple[Item, ...]:
        return tuple(self._items)

    @property
    def vendors(self) -> Tuple[Vendor, ...]:
        return tuple(self._vendors)

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._categories)

    def get_item(self, item_id: str) -> Item:
        for i in self._items:
            if i.id == item_id:
                return i
        raise NotFoundError(f"Item {item_id} not found")

    def get_vendor(self, vendor_id: str) -> Vendor:
        for v in self._vendors:
            if v.id == vendor_id:
                return v
        raise NotFoundError(f"Vendor {vendor_id} not found")

    # ----------------------------
    # Session / catalog
    # ----------------------------

    def mark_connected(self, config: Optional[CloverConfig], demo: bool = False) -> None:
        self.pos_config = config
        self.connected = True
        self.demo_mode = demo

    def mark_disconnected(self) -> None:
        # Local data is kept; only the session flags go.
        self.connected = False
        self.demo_mode = False
        self.syncing = False

    def apply_catalog(self, external_items: Sequence[Dict], external_categories: Sequence[Dict]) -> None:
        self._items = merge_catalog(self._items, external_items)
        self._categories = merge_categories(external_categories)
        self.last_synced = datetime.now()

    def load_snapshot(self, items: Sequence[Item], categories: Sequence[Category], vendors: Sequence[Vendor]) -> None:
        self._items = list(items)
        self._categories = list(categories)
        self._vendors = list(vendors)
        self.last_synced = datetime.now()

    # ----------------------------
    # Items
    # ----------------------------

    def add_item(self, payload: ItemCreate) -> Item:
        cost = payload.unit_cost()
        item = Item(
            id=timestamp_id("itm", {i.id for i in self._items}),
            name=payload.name,
            sku=payload.sku,
            price=payload.price,
            cost=cost,
            quantity=payload.quantity,
            category_id=payload.category_id,
            expiry_date=payload.expiry_date,
            barcode=payload.barcode,
            cost_history=[
                CostEntry(
                    date=date.today(),
                    cost=cost,
                    case_price=payload.case_price or None,
                    case_qty=payload.case_qty or None,
                )
            ],
        )
        self._items.append(item)
        return item

    def edit_item(self, item_id: str, payload: ItemUpdate) -> Item:
        item = self.get_item(item_id)
        data = payload.model_dump(exclude_unset=True, exclude={"kind"})
        for key in ("name", "price", "quantity"):
            if key in data and data[key] is None:
                raise ledger.LedgerValidationError(f"{key} is required")
        for key, value in data.items():
            if key in ("sku", "barcode") and value is None:
                value = ""
            if key == "cost" and value is None:
                value = 0.0
            setattr(item, key, value)
        return item

    def delete_item(self, item_id: str) -> None:
        item = self.get_item(item_id)
        self._items.remove(item)

    # ----------------------------
    # Ledger
    # ----------------------------

    def record_delivery(self, item_id: str, payload: DeliveryCreate) -> DeliveryRecord:
        item = self.get_item(item_id)
        return ledger.record_delivery(
            item,
            payload.qty,
            unit_cost=payload.unit_cost,
            vendor_id=payload.vendor_id,
            note=payload.note,
            on=payload.date,
            case_price=payload.case_price,
            case_qty=payload.case_qty,
        )

    def record_sale(self, item_id: str, payload: SaleCreate) -> SaleRecord:
        item = self.get_item(item_id)
        return ledger.record_sale(item, payload.qty, on=payload.date)

    def adjust_stock(self, item_id: str, payload: StockAdjustmentCreate) -> int:
        item = self.get_item(item_id)
        return ledger.adjust_stock(item, payload.delta, note=payload.note)

    # ----------------------------
    # Vendors / categories
    # ----------------------------

    def add_vendor(self, payload: VendorCreate) -> Vendor:
        vendor = Vendor(
            id=timestamp_id("ven", {v.id for v in self._vendors}),
            **payload.model_dump(exclude={"kind"}),
        )
        self._vendors.append(vendor)
        return vendor

    def edit_vendor(self, vendor_id: str, payload: VendorUpdate) -> Vendor:
        vendor = self.get_vendor(vendor_id)
        for key, value in payload.model_dump(exclude_unset=True, exclude={"kind"}).items():
            if key == "name" and value is None:
                raise ledger.LedgerValidationError("name is required")
            setattr(vendor, key, value or "")
        return vendor

    def delete_vendor(self, vendor_id: str) -> None:
        # Deliveries keep the dangling vendor id.
        vendor = self.get_vendor(vendor_id)
        self._vendors.remove(vendor)

    def add_category(self, payload: CategoryCreate) -> Category:
        category = Category(id=timestamp_id("cat", {c.id for c in self._categories}), name=payload.name)
        self._categories.append(category)
        return category

    # ----------------------------
    # Tagged operations
    # ----------------------------

    def apply(self, payload, target_id: Optional[str] = None) -> Dict:
        """Run one operation payload; returns {"kind", "message", "result"}."""
        kind = payload.kind
        if kind == "add_item":
            item = self.add_item(payload)
            return {"kind": kind, "message": "Item added", "result": item.to_schema}
        if kind == "edit_item":
            item = self.edit_item(target_id, payload)
            return {"kind": kind, "message": "Item updated", "result": item.to_schema}
        if kind == "record_sale":
            record = self.record_sale(target_id, payload)
            return {"kind": kind, "message": f"Recorded sale of {record.qty}", "result": record.to_schema}
        if kind == "record_delivery":
            record = self.record_delivery(target_id, payload)
            return {"kind": kind, "message": f"Received {record.qty} units", "result": record.to_schema}
        if kind == "adjust_stock":
            quantity = self.adjust_stock(target_id, payload)
            return {
                "kind": kind,
                "message": f"Stock adjusted by {payload.delta:+d}",
                "result": {"id": target_id, "quantity": quantity},
            }
        if kind == "add_vendor":
            vendor = self.add_vendor(payload)
            return {"kind": kind, "message": "Vendor added", "result": vendor.to_schema}
        if kind == "edit_vendor":
            vendor = self.edit_vendor(target_id, payload)
            return {"kind": kind, "message": "Vendor updated", "result": vendor.to_schema}
        if kind == "add_category":
            category = self.add_category(payload)
            return {"kind": kind, "message": "Category added", "result": category.to_schema}
        raise ValueError(f"Unknown operation: {kind}")


app_state = AppState()


def get_app_state() -> AppState:
    return app_state
