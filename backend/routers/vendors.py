from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import Dict, List

from core import metrics
from core.ledger import LedgerValidationError
from db.state import AppState, NotFoundError, get_app_state
from schemas.vendors import VendorCreate, VendorRead, VendorUpdate

router = APIRouter()


@router.get("/", response_model=List[Dict])
async def list_vendors(state: AppState = Depends(get_app_state)):
    """Vendors with delivery rollups (count, quantity, spend, last delivery)."""
    return metrics.vendor_rollups(state.vendors, state.items)


@router.post("/", response_model=VendorRead, status_code=status.HTTP_201_CREATED)
async def create_vendor(payload: VendorCreate, state: AppState = Depends(get_app_state)):
    vendor = state.add_vendor(payload)
    return VendorRead(**vendor.to_schema)


@router.patch("/{vendor_id}", response_model=VendorRead)
async def update_vendor(vendor_id: str, payload: VendorUpdate, state: AppState = Depends(get_app_state)):
    try:
        vendor = state.edit_vendor(vendor_id, payload)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")
    except LedgerValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return VendorRead(**vendor.to_schema)


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(vendor_id: str, state: AppState = Depends(get_app_state)):
    try:
        state.delete_vendor(vendor_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
