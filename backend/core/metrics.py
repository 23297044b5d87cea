"""
Derived inventory metrics.

Everything here is a pure function of the item / vendor / category lists it is
given: nothing is cached and nothing is mutated, so calling any of these twice
without an intervening change returns equal results.
"""

import math
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence

from core.config import settings
from db.category import UNCATEGORIZED, Category
from db.inventory import Item
from db.vendor import UNREGISTERED_VENDOR, Vendor


EXPIRY_STATUSES = ("ok", "warning", "critical", "expired")
EXPIRING_STATUSES = ("critical", "warning")

_SECONDS_PER_DAY = 24 * 60 * 60


def avg_cost(item: Item) -> float:
    """Unweighted mean of the cost history; the item's cost when there is none."""
    if not item.cost_history:
        return item.cost
    return sum(e.cost for e in item.cost_history) / len(item.cost_history)


def margin_pct(item: Item) -> Optional[float]:
    # Undefined for a zero price.
    if not item.price:
        return None
    return (item.price - avg_cost(item)) / item.price * 100


def days_until_expiry(expiry: Optional[date], now: Optional[datetime] = None) -> Optional[int]:
    if expiry is None:
        return None
    now = now or datetime.now()
    diff = datetime.combine(expiry, time.min) - now
    # A partial day still counts as a day remaining.
    return math.ceil(diff.total_seconds() / _SECONDS_PER_DAY)


def expiry_status(expiry: Optional[date], now: Optional[datetime] = None) -> str:
    d = days_until_expiry(expiry, now)
    if d is None:
        return "ok"
    if d < 0:
        return "expired"
    if d <= 3:
        return "critical"
    if d <= 7:
        return "warning"
    return "ok"


def category_name(categories: Iterable[Category], category_id: Optional[str]) -> str:
    for c in categories:
        if c.id == category_id:
            return c.name
    return UNCATEGORIZED


def vendor_name(vendors: Iterable[Vendor], vendor_id: Optional[str]) -> str:
    for v in vendors:
        if v.id == vendor_id:
            return v.name
    return UNREGISTERED_VENDOR


def item_view(item: Item, categories: Sequence[Category], now: Optional[datetime] = None) -> Dict:
    """Item as the dashboard renders it: stored fields plus derived ones."""
    out = item.to_schema
    out["avg_cost"] = avg_cost(item)
    out["margin_pct"] = margin_pct(item)
    out["days_until_expiry"] = days_until_expiry(item.expiry_date, now)
    out["expiry_status"] = expiry_status(item.expiry_date, now)
    out["category_name"] = category_name(categories, item.category_id)
    return out


def inventory_summary(
    items: Sequence[Item],
    now: Optional[datetime] = None,
    low_stock_threshold: Optional[int] = None,
) -> Dict:
    threshold = settings.low_stock_threshold if low_stock_threshold is None else low_stock_threshold
    return {
        "item_count": len(items),
        "total_value": sum(i.price * i.quantity for i in items),
        "total_cost": sum(avg_cost(i) * i.quantity for i in items),
        "expiring_count": sum(1 for i in items if expiry_status(i.expiry_date, now) in EXPIRING_STATUSES),
        "low_stock_count": sum(1 for i in items if i.quantity <= threshold),
    }


def vendor_rollups(vendors: Sequence[Vendor], items: Sequence[Item]) -> List[Dict]:
    out = []
    for v in vendors:
        deliveries = [d for i in items for d in i.delivery_history if d.vendor_id == v.id]
        last = max((d.date for d in deliveries), default=None)
        row = v.to_schema
        row.update(
            {
                "delivery_count": len(deliveries),
                "total_qty": sum(d.qty for d in deliveries),
                "total_spend": sum(d.total_cost for d in deliveries),
                "last_delivery_date": last,
            }
        )
        out.append(row)
    return out


def category_rollups(categories: Sequence[Category], items: Sequence[Item]) -> List[Dict]:
    out = []
    for c in categories:
        cat_items = [i for i in items if i.category_id == c.id]
        out.append(
            {
                "id": c.id,
                "name": c.name,
                "item_count": len(cat_items),
                "total_value": sum(i.price * i.quantity for i in cat_items),
            }
        )
    return out


def sales_summary(items: Sequence[Item], categories: Sequence[Category]) -> List[Dict]:
    out = []
    for item in items:
        if not item.sales_history:
            continue
        sold = sum(r.qty for r in item.sales_history)
        revenue = sum(r.revenue for r in item.sales_history)
        out.append(
            {
                "item_id": item.id,
                "name": item.name,
                "category_name": category_name(categories, item.category_id),
                "total_sold": sold,
                "revenue": revenue,
                "profit": revenue - sold * avg_cost(item),
                "recent_sales": [r.to_schema for r in item.sales_history[-3:]],
            }
        )
    return out


def delivery_log(items: Sequence[Item], vendors: Sequence[Vendor]) -> List[Dict]:
    """All deliveries across items, grouped by date (newest first)."""
    by_date: Dict[date, List[Dict]] = {}
    for item in items:
        for d in item.delivery_history:
            row = d.to_schema
            row["item_id"] = item.id
            row["item_name"] = item.name
            row["vendor_name"] = vendor_name(vendors, d.vendor_id)
            by_date.setdefault(d.date, []).append(row)

    return [
        {
            "date": day,
            "deliveries": rows,
            "total_cost": sum(r["total_cost"] for r in rows),
        }
        for day, rows in sorted(by_date.items(), key=lambda kv: kv[0], reverse=True)
    ]


def filter_items(
    items: Sequence[Item],
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    expiry: str = "all",
    now: Optional[datetime] = None,
) -> List[Item]:
    q = (search or "").strip().lower()
    out = []
    for i in items:
        if q and q not in i.name.lower() and q not in (i.sku or "").lower() and q not in (i.barcode or ""):
            continue
        if category_id and i.category_id != category_id:
            continue
        if expiry != "all":
            s = expiry_status(i.expiry_date, now)
            if expiry == "expiring" and s not in EXPIRING_STATUSES:
                continue
            if expiry == "expired" and s != "expired":
                continue
        out.append(i)
    return out


def sort_items(items: Sequence[Item], sort_by: str = "name") -> List[Item]:
    if sort_by == "name":
        return sorted(items, key=lambda i: i.name.casefold())
    if sort_by == "qty":
        return sorted(items, key=lambda i: i.quantity, reverse=True)
    if sort_by == "price":
        return sorted(items, key=lambda i: i.price, reverse=True)
    if sort_by == "expiry":
        # Items without an expiry date go last.
        return sorted(items, key=lambda i: (i.expiry_date is None, i.expiry_date or date.max))
    return list(items)
