"""
Statistics API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.schemas.common import ApiResponse
from kaptal.schemas.stats import CategoryStats, Insights, MonthHistory, Overview
from kaptal.schemas.transaction import TransactionResponse
from kaptal.services import stats_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/overview", response_model=ApiResponse[Overview])
def get_overview(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Current month totals and the latest transactions."""
    overview = stats_service.get_overview(db, user_id)
    overview["recent_transactions"] = [
        TransactionResponse.model_validate(t) for t in overview["recent_transactions"]
    ]
    return ApiResponse(data=Overview.model_validate(overview))


@router.get("/by-category", response_model=ApiResponse[CategoryStats])
def get_stats_by_category(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Expenses per category, defaulting to the current month."""
    return ApiResponse(data=stats_service.get_category_stats(db, user_id, start_date, end_date))


@router.get("/monthly", response_model=ApiResponse[List[MonthHistory]])
def get_monthly_history(
    months: int = Query(6, ge=1, le=24),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ApiResponse(data=stats_service.get_monthly_history(db, user_id, months))


@router.get("/insights", response_model=ApiResponse[Insights])
def get_insights(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ApiResponse(data=stats_service.get_insights(db, user_id))
