"""
Category budget API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.schemas.common import ApiResponse, MessageResponse
from kaptal.schemas.category_budget import (
    CategoryBudgetResponse,
    CategoryBudgetSet,
    CategoryBudgetSummary,
)
from kaptal.services import budget_service
from kaptal.services.periods import resolve_period

router = APIRouter(prefix="/category-budgets", tags=["category-budgets"])


@router.get("", response_model=ApiResponse[CategoryBudgetSummary])
def get_category_budgets(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2020, le=2100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Budget vs. spending per category for a month (defaults to the current one)."""
    month, year = resolve_period(month, year)
    summary = budget_service.compute_category_budgets(db, user_id, month, year)
    return ApiResponse(data=summary)


@router.post("", response_model=ApiResponse[CategoryBudgetResponse])
def set_category_budget(
    payload: CategoryBudgetSet,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create or replace a category's budget for a month."""
    budget = budget_service.set_category_budget(
        db,
        user_id,
        payload.category_id,
        payload.month,
        payload.year,
        payload.amount,
    )
    return ApiResponse(data=CategoryBudgetResponse.model_validate(budget))


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category_budget(
    category_id: str,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2020, le=2100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Remove a category's budget for a month."""
    budget_service.delete_category_budget(db, user_id, category_id, month, year)
    return MessageResponse(message="Orçamento removido")
