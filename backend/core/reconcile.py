"""
Merge a Clover catalog snapshot into the local item list.

The catalog decides which items exist and owns name / quantity / price; the
name is always overwritten, a missing quantity or price keeps the local value.
Everything recorded locally (sales, deliveries, cost history, sku, expiry...)
is carried over for items that survive the merge.
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from db.category import Category
from db.inventory import Item


def price_from_minor(price_minor) -> Optional[float]:
    if price_minor is None:
        return None
    return int(price_minor) / 100


def _first_category_id(element: Dict) -> Optional[str]:
    # expand=categories returns {"categories": {"elements": [{"id": ...}, ...]}}
    cats = element.get("categories") or {}
    if isinstance(cats, dict):
        cats = cats.get("elements") or []
    for c in cats:
        if isinstance(c, dict) and c.get("id"):
            return str(c["id"])
    return None


def _new_item(element: Dict) -> Item:
    return Item(
        id=str(element["id"]),
        name=element.get("name") or "",
        sku=element.get("sku") or "",
        price=price_from_minor(element.get("price")) or 0.0,
        quantity=max(0, int(element.get("quantity") or 0)),
        category_id=_first_category_id(element),
        barcode=element.get("code") or "",
    )


def _merged_item(existing: Item, element: Dict) -> Item:
    price = price_from_minor(element.get("price"))
    quantity = element.get("quantity")
    return replace(
        existing,
        name=element.get("name") or "",
        quantity=existing.quantity if quantity is None else max(0, int(quantity)),
        price=existing.price if price is None else price,
        category_id=_first_category_id(element) or existing.category_id,
        # New list objects so the merged item never aliases the previous one.
        sales_history=list(existing.sales_history),
        delivery_history=list(existing.delivery_history),
        cost_history=list(existing.cost_history),
    )


def merge_catalog(local_items: Sequence[Item], external_items: Iterable[Dict]) -> List[Item]:
    by_id = {i.id: i for i in local_items}
    seen = set()
    out = []
    for element in external_items:
        if not element or element.get("id") is None:
            continue
        item_id = str(element["id"])
        if item_id in seen:
            continue
        seen.add(item_id)
        existing = by_id.get(item_id)
        out.append(_merged_item(existing, element) if existing else _new_item(element))
    return out


def merge_categories(external_categories: Iterable[Dict]) -> List[Category]:
    # Wholesale replacement: local category edits do not survive a sync.
    return [
        Category(id=str(c["id"]), name=c.get("name") or "")
        for c in external_categories
        if c and c.get("id") is not None
    ]
