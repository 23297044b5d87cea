"""
Operational ledger: deliveries, sales and stock adjustments on one item.

Each operation validates its input first and only then mutates the item, so a
rejected call leaves the item exactly as it was.
"""

import logging
from datetime import date
from typing import Optional

from core.ids import timestamp_id
from db.inventory import CostEntry, DeliveryRecord, Item, SaleRecord

logger = logging.getLogger(__name__)


class LedgerValidationError(ValueError):
    pass


def _positive_qty(qty) -> int:
    try:
        q = int(qty)
    except (TypeError, ValueError):
        raise LedgerValidationError("Enter a quantity")
    if q <= 0:
        raise LedgerValidationError("Enter a quantity")
    return q


def case_unit_cost(case_price: Optional[float], case_qty: Optional[int]) -> Optional[float]:
    if case_price and case_qty and case_qty > 0:
        return case_price / case_qty
    return None


def record_delivery(
    item: Item,
    qty,
    unit_cost: Optional[float] = None,
    vendor_id: Optional[str] = None,
    note: str = "",
    on: Optional[date] = None,
    case_price: Optional[float] = None,
    case_qty: Optional[int] = None,
) -> DeliveryRecord:
    q = _positive_qty(qty)
    if unit_cost is None:
        unit_cost = case_unit_cost(case_price, case_qty) or 0.0
    unit_cost = float(unit_cost)
    if unit_cost < 0:
        raise LedgerValidationError("unit cost cannot be negative")
    on = on or date.today()

    if vendor_id is None and item.delivery_history:
        # Same vendor as last time unless told otherwise.
        vendor_id = item.delivery_history[-1].vendor_id

    record = DeliveryRecord(
        id=timestamp_id("d", {d.id for d in item.delivery_history}),
        date=on,
        qty=q,
        vendor_id=vendor_id or "",
        unit_cost=unit_cost,
        total_cost=unit_cost * q,
        note=note or "",
    )

    item.quantity += q
    item.delivery_history.append(record)
    if unit_cost > 0:
        item.cost = unit_cost
        item.cost_history.append(
            CostEntry(
                date=on,
                cost=unit_cost,
                case_price=case_price or None,
                case_qty=case_qty or None,
            )
        )
    return record


def record_sale(item: Item, qty, on: Optional[date] = None) -> SaleRecord:
    q = _positive_qty(qty)
    # Revenue is priced at the item's current price.
    record = SaleRecord(date=on or date.today(), qty=q, revenue=q * item.price)
    item.quantity = max(0, item.quantity - q)
    item.sales_history.append(record)
    return record


def adjust_stock(item: Item, delta, note: str = "") -> int:
    try:
        d = int(delta)
    except (TypeError, ValueError):
        raise LedgerValidationError("Enter an adjustment")
    before = item.quantity
    item.quantity = max(0, item.quantity + d)
    # Adjustments have no history sequence of their own; the log is the only trace.
    logger.info("stock adjusted item=%s delta=%+d %d -> %d note=%r", item.id, d, before, item.quantity, note)
    return item.quantity
