from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class SaleRecord:
    date: date
    qty: int
    revenue: float

    @property
    def to_schema(self):
        return {"date": self.date, "qty": self.qty, "revenue": self.revenue}


@dataclass(frozen=True)
class DeliveryRecord:
    id: str
    date: date
    qty: int
    vendor_id: str
    unit_cost: float
    total_cost: float
    note: str = ""

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "date": self.date,
            "qty": self.qty,
            "vendor_id": self.vendor_id,
            "unit_cost": self.unit_cost,
            "total_cost": self.total_cost,
            "note": self.note,
        }


@dataclass(frozen=True)
class CostEntry:
    """Unit cost observed on a date; case fields keep the calculator provenance."""

    date: date
    cost: float
    case_price: Optional[float] = None
    case_qty: Optional[int] = None

    @property
    def to_schema(self):
        return {
            "date": self.date,
            "cost": self.cost,
            "case_price": self.case_price,
            "case_qty": self.case_qty,
        }
