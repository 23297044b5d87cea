from fastapi import APIRouter, Depends
from typing import Dict

from core import metrics
from db.state import AppState, get_app_state

router = APIRouter()


@router.get("/summary", response_model=Dict)
async def get_summary(state: AppState = Depends(get_app_state)):
    """Header stats: stock value, stock cost, expiring soon, low stock."""
    return metrics.inventory_summary(state.items)
