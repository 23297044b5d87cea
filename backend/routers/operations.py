from fastapi import APIRouter, Depends, HTTPException, status
from typing import Dict

from core.ledger import LedgerValidationError
from db.state import AppState, NotFoundError, get_app_state
from schemas.operations import OperationRequest

router = APIRouter()


@router.post("", response_model=Dict)
async def apply_operation(request: OperationRequest, state: AppState = Depends(get_app_state)):
    """
    Apply one dashboard form submission.

    The payload's `kind` picks the operation (add_item, edit_item, record_sale,
    record_delivery, adjust_stock, add_vendor, edit_vendor, add_category).
    """
    try:
        return state.apply(request.payload, target_id=request.target_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except LedgerValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
