"""
Budget endpoints for API v1.

Mounted under both ``/budget`` and ``/budget-items``.  Only couples and
individuals have budgets; other callers get 404 "Consumer profile not
found".
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from wedsimplify_api.app.core.security import get_current_user_id
from wedsimplify_api.app.schemas.budget import (
    BudgetItemCreate,
    BudgetItemRead,
    BudgetItemUpdate,
    BudgetSummary,
)
from wedsimplify_api.app.services.budget_service import BudgetService


router = APIRouter()


@router.get("", response_model=List[BudgetItemRead])
async def list_budget_items(user_id: str = Depends(get_current_user_id)) -> List[BudgetItemRead]:
    """Budget items of the caller, most recent first."""
    return await BudgetService.list_items(user_id)


@router.post("", response_model=BudgetItemRead, status_code=status.HTTP_201_CREATED)
async def create_budget_item(
    item: BudgetItemCreate,
    user_id: str = Depends(get_current_user_id),
) -> BudgetItemRead:
    return await BudgetService.create_item(user_id, item)


@router.get("/summary", response_model=BudgetSummary)
async def budget_summary(user_id: str = Depends(get_current_user_id)) -> BudgetSummary:
    return await BudgetService.summary(user_id)


@router.put("/{item_id}", response_model=BudgetItemRead)
async def update_budget_item(
    updates: BudgetItemUpdate,
    item_id: str = Path(..., description="ID of the budget item"),
    user_id: str = Depends(get_current_user_id),
) -> BudgetItemRead:
    return await BudgetService.update_item(user_id, item_id, updates)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget_item(
    item_id: str = Path(..., description="ID of the budget item"),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    await BudgetService.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
