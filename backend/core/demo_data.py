"""
Sample store used by demo mode (no Clover account needed).

Dates are relative to the day the demo is loaded so the expiry badges always
show a mix of states.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Tuple

from db.category import Category
from db.inventory import CostEntry, DeliveryRecord, Item, SaleRecord
from db.vendor import Vendor


def build_demo_store(today: Optional[date] = None) -> Tuple[List[Item], List[Category], List[Vendor]]:
    today = today or date.today()

    def ago(days: int) -> date:
        return today - timedelta(days=days)

    def ahead(days: int) -> date:
        return today + timedelta(days=days)

    vendors = [
        Vendor(id="ven1", name="Fresh Farms Co.", contact="John Smith", phone="604-555-0101",
               email="orders@freshfarms.com", note="Delivers Mon/Wed/Fri"),
        Vendor(id="ven2", name="Metro Wholesale", contact="Amy Lee", phone="604-555-0202",
               email="amy@metrowholesale.com", note="Delivers Tue/Thu"),
        Vendor(id="ven3", name="Dairy Direct", contact="Mike Chen", phone="604-555-0303",
               email="mike@dairydirect.ca", note="Daily early-morning delivery"),
    ]

    categories = [
        Category(id="cat1", name="Beverages"),
        Category(id="cat2", name="Dairy"),
        Category(id="cat3", name="Bakery"),
        Category(id="cat4", name="Produce"),
    ]

    items = [
        Item(
            id="itm1", name="Whole Milk 1L", sku="MLK001", price=3.99, cost=2.10, quantity=42,
            category_id="cat2", expiry_date=ahead(10), barcode="1234567890",
            sales_history=[
                SaleRecord(date=ago(24), qty=8, revenue=31.92),
                SaleRecord(date=ago(15), qty=12, revenue=47.88),
                SaleRecord(date=ago(5), qty=6, revenue=23.94),
            ],
            cost_history=[CostEntry(date=ago(41), cost=2.00), CostEntry(date=ago(24), cost=2.10)],
            delivery_history=[
                DeliveryRecord(id="d1", date=ago(41), qty=48, vendor_id="ven3", unit_cost=2.00,
                               total_cost=96.00, note="Standing order"),
                DeliveryRecord(id="d2", date=ago(24), qty=36, vendor_id="ven3", unit_cost=2.10,
                               total_cost=75.60),
            ],
        ),
        Item(
            id="itm2", name="Sourdough Bread", sku="BRD002", price=6.50, cost=3.20, quantity=15,
            category_id="cat3", expiry_date=ahead(2), barcode="9876543210",
            sales_history=[
                SaleRecord(date=ago(20), qty=5, revenue=32.50),
                SaleRecord(date=ago(10), qty=9, revenue=58.50),
            ],
            cost_history=[CostEntry(date=ago(24), cost=3.20)],
            delivery_history=[
                DeliveryRecord(id="d3", date=ago(24), qty=20, vendor_id="ven1", unit_cost=3.20,
                               total_cost=64.00, note="Tuesday regular"),
            ],
        ),
        Item(
            id="itm3", name="Orange Juice 500ml", sku="OJ003", price=4.25, cost=1.90, quantity=60,
            category_id="cat1", expiry_date=ahead(50), barcode="1122334455",
            sales_history=[
                SaleRecord(date=ago(17), qty=20, revenue=85.00),
                SaleRecord(date=ago(7), qty=15, revenue=63.75),
            ],
            cost_history=[
                CostEntry(date=ago(46), cost=1.80, case_price=43.20, case_qty=24),
                CostEntry(date=ago(20), cost=1.90),
            ],
            delivery_history=[
                DeliveryRecord(id="d4", date=ago(46), qty=72, vendor_id="ven2", unit_cost=1.80,
                               total_cost=129.60, note="6 cases"),
                DeliveryRecord(id="d5", date=ago(20), qty=48, vendor_id="ven2", unit_cost=1.90,
                               total_cost=91.20),
            ],
        ),
        Item(
            id="itm4", name="Cherry Tomatoes 250g", sku="TOM004", price=2.99, cost=1.40, quantity=4,
            category_id="cat4", expiry_date=ahead(5), barcode="5544332211",
            sales_history=[SaleRecord(date=ago(5), qty=10, revenue=29.90)],
            cost_history=[CostEntry(date=ago(24), cost=1.40)],
            delivery_history=[
                DeliveryRecord(id="d6", date=ago(5), qty=40, vendor_id="ven1", unit_cost=1.40,
                               total_cost=56.00, note="Fresh produce"),
            ],
        ),
    ]
    return items, categories, vendors
