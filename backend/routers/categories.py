from fastapi import APIRouter, Depends, status
from typing import Dict, List

from core import metrics
from db.state import AppState, get_app_state
from schemas.categories import CategoryCreate, CategoryRead

router = APIRouter()


@router.get("/", response_model=List[Dict])
async def list_categories(state: AppState = Depends(get_app_state)):
    """Categories with item count and stock value."""
    return metrics.category_rollups(state.categories, state.items)


@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, state: AppState = Depends(get_app_state)):
    category = state.add_category(payload)
    return CategoryRead(**category.to_schema)
