from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core import metrics
from core.ledger import LedgerValidationError
from db.state import AppState, NotFoundError, get_app_state
from schemas.inventory import (
    DeliveryCreate,
    ExpiryFilter,
    ItemCreate,
    ItemSort,
    ItemUpdate,
    SaleCreate,
    StockAdjustmentCreate,
)


router = APIRouter()


def _item_out(state: AppState, item) -> Dict:
    return metrics.item_view(item, state.categories)


@router.get("/items", response_model=List[Dict])
async def list_inventory_items(
    q: Optional[str] = None,
    category_id: Optional[str] = None,
    expiry: ExpiryFilter = "all",
    sort_by: ItemSort = "name",
    state: AppState = Depends(get_app_state),
):
    """
    List items with derived fields.

    - q matches name, sku (case-insensitive) or barcode.
    - expiry: all | expiring (critical + warning) | expired.
    """
    items = metrics.filter_items(state.items, search=q, category_id=category_id, expiry=expiry)
    return [_item_out(state, i) for i in metrics.sort_items(items, sort_by)]


@router.get("/items/{item_id}", response_model=Dict)
async def get_inventory_item(item_id: str, state: AppState = Depends(get_app_state)):
    try:
        item = state.get_item(item_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return _item_out(state, item)


@router.post("/items", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(payload: ItemCreate, state: AppState = Depends(get_app_state)):
    item = state.add_item(payload)
    return {"message": "Item added", "item": _item_out(state, item)}


@router.patch("/items/{item_id}", response_model=Dict)
async def update_inventory_item(item_id: str, payload: ItemUpdate, state: AppState = Depends(get_app_state)):
    try:
        item = state.edit_item(item_id, payload)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    except LedgerValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"message": "Item updated", "item": _item_out(state, item)}


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item(item_id: str, state: AppState = Depends(get_app_state)):
    try:
        state.delete_item(item_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/items/{item_id}/deliveries", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def record_delivery(item_id: str, payload: DeliveryCreate, state: AppState = Depends(get_app_state)):
    try:
        record = state.record_delivery(item_id, payload)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    except LedgerValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {
        "message": f"Received {record.qty} units",
        "delivery": record.to_schema,
        "item": _item_out(state, state.get_item(item_id)),
    }


@router.post("/items/{item_id}/sales", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def record_sale(item_id: str, payload: SaleCreate, state: AppState = Depends(get_app_state)):
    try:
        record = state.record_sale(item_id, payload)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    except LedgerValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {
        "message": f"Recorded sale of {record.qty}",
        "sale": record.to_schema,
        "item": _item_out(state, state.get_item(item_id)),
    }


@router.post("/items/{item_id}/adjustments", response_model=Dict)
async def adjust_stock(item_id: str, payload: StockAdjustmentCreate, state: AppState = Depends(get_app_state)):
    try:
        state.adjust_stock(item_id, payload)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    except LedgerValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {
        "message": f"Stock adjusted by {payload.delta:+d}",
        "item": _item_out(state, state.get_item(item_id)),
    }


@router.get("/deliveries", response_model=List[Dict])
async def list_deliveries(state: AppState = Depends(get_app_state)):
    """Deliveries across all items grouped by date, newest first."""
    return metrics.delivery_log(state.items, state.vendors)


@router.get("/sales", response_model=List[Dict])
async def list_sales(state: AppState = Depends(get_app_state)):
    return metrics.sales_summary(state.items, state.categories)
