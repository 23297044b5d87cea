from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .history import CostEntry, DeliveryRecord, SaleRecord


@dataclass
class Item:
    id: str
    name: str
    sku: str = ""
    price: float = 0.0
    cost: float = 0.0
    quantity: int = 0
    category_id: Optional[str] = None
    expiry_date: Optional[date] = None
    barcode: str = ""

    # Locally owned; a catalog refresh never touches these.
    sales_history: List[SaleRecord] = field(default_factory=list)
    delivery_history: List[DeliveryRecord] = field(default_factory=list)
    cost_history: List[CostEntry] = field(default_factory=list)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "price": self.price,
            "cost": self.cost,
            "quantity": self.quantity,
            "category_id": self.category_id,
            "expiry_date": self.expiry_date,
            "barcode": self.barcode,
            "sales_history": [r.to_schema for r in self.sales_history],
            "delivery_history": [r.to_schema for r in self.delivery_history],
            "cost_history": [r.to_schema for r in self.cost_history],
        }
