import datetime
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator


ExpiryFilter = Literal["all", "expiring", "expired"]
ItemSort = Literal["name", "qty", "price", "expiry"]


def _strip_nullable(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class ItemCreate(BaseModel):
    kind: Literal["add_item"] = "add_item"

    name: str
    sku: str = ""
    price: float
    cost: Optional[float] = None
    quantity: int = 0
    category_id: Optional[str] = None
    expiry_date: Optional[date] = None
    barcode: str = ""
    # Case calculator: unit cost = case_price / case_qty when cost is not given.
    case_price: Optional[float] = None
    case_qty: Optional[int] = None

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("price")
    @classmethod
    def _price_required(cls, v: float) -> float:
        if v is None or v <= 0:
            raise ValueError("price is required")
        return v

    @field_validator("quantity")
    @classmethod
    def _quantity_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quantity must be >= 0")
        return v

    @field_validator("category_id")
    @classmethod
    def _category(cls, v: Optional[str]) -> Optional[str]:
        return _strip_nullable(v)

    @field_validator("case_qty")
    @classmethod
    def _case_qty_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("case_qty must be > 0")
        return v

    def unit_cost(self) -> float:
        if self.cost is not None:
            return float(self.cost)
        if self.case_price and self.case_qty:
            return self.case_price / self.case_qty
        return 0.0


class ItemUpdate(BaseModel):
    kind: Literal["edit_item"] = "edit_item"

    name: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[float] = None
    cost: Optional[float] = None
    quantity: Optional[int] = None
    category_id: Optional[str] = None
    expiry_date: Optional[date] = None
    barcode: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("price")
    @classmethod
    def _price_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("price is required")
        return v

    @field_validator("quantity")
    @classmethod
    def _quantity_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("quantity must be >= 0")
        return v


class SaleCreate(BaseModel):
    kind: Literal["record_sale"] = "record_sale"

    qty: int = 1
    date: Optional[datetime.date] = None

    @field_validator("qty")
    @classmethod
    def _qty_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("qty must be > 0")
        return v


class DeliveryCreate(BaseModel):
    kind: Literal["record_delivery"] = "record_delivery"

    qty: int
    unit_cost: Optional[float] = None
    vendor_id: Optional[str] = None
    note: str = ""
    date: Optional[datetime.date] = None
    case_price: Optional[float] = None
    case_qty: Optional[int] = None

    @field_validator("qty")
    @classmethod
    def _qty_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("qty must be > 0")
        return v

    @field_validator("vendor_id")
    @classmethod
    def _vendor(cls, v: Optional[str]) -> Optional[str]:
        # "" means no vendor; only None falls back to the last delivery's vendor.
        return None if v is None else v.strip()

    @model_validator(mode="after")
    def _case_pair(self):
        if (self.case_price is None) != (self.case_qty is None):
            raise ValueError("case_price and case_qty must be given together")
        if self.case_qty is not None and self.case_qty <= 0:
            raise ValueError("case_qty must be > 0")
        return self


class StockAdjustmentCreate(BaseModel):
    kind: Literal["adjust_stock"] = "adjust_stock"

    delta: int
    note: str = ""
