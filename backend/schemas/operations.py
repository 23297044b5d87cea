from typing import Annotated, Optional, Union

from pydantic import BaseModel, Field, model_validator

from schemas.categories import CategoryCreate
from schemas.inventory import (
    DeliveryCreate,
    ItemCreate,
    ItemUpdate,
    SaleCreate,
    StockAdjustmentCreate,
)
from schemas.vendors import VendorCreate, VendorUpdate


OperationPayload = Annotated[
    Union[
        ItemCreate,
        ItemUpdate,
        SaleCreate,
        DeliveryCreate,
        StockAdjustmentCreate,
        VendorCreate,
        VendorUpdate,
        CategoryCreate,
    ],
    Field(discriminator="kind"),
]

# Operations that act on an existing record and need its id.
TARGETED_KINDS = {"edit_item", "record_sale", "record_delivery", "adjust_stock", "edit_vendor"}


class OperationRequest(BaseModel):
    """One dashboard mutation: the payload's `kind` selects the operation."""

    target_id: Optional[str] = None
    payload: OperationPayload

    @model_validator(mode="after")
    def _target_required(self):
        if self.payload.kind in TARGETED_KINDS and not (self.target_id or "").strip():
            raise ValueError(f"{self.payload.kind} requires target_id")
        return self
