"""
Monthly spending goal API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.schemas.common import ApiResponse, MessageResponse
from kaptal.schemas.monthly_goal import MonthlyGoalResponse, MonthlyGoalSet, MonthlyGoalStatus
from kaptal.services import monthly_goal_service
from kaptal.services.periods import resolve_period

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=ApiResponse[MonthlyGoalStatus])
def get_monthly_goal(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2020, le=2100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Goal of the month with what has been spent against it."""
    month, year = resolve_period(month, year)
    status = monthly_goal_service.get_goal_status(db, user_id, month, year)
    if status["goal"] is not None:
        status["goal"] = MonthlyGoalResponse.model_validate(status["goal"])
    return ApiResponse(data=MonthlyGoalStatus.model_validate(status))


@router.post("", response_model=ApiResponse[MonthlyGoalResponse])
def set_monthly_goal(
    payload: MonthlyGoalSet,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    goal = monthly_goal_service.set_goal(db, user_id, payload.month, payload.year, payload.amount)
    return ApiResponse(data=MonthlyGoalResponse.model_validate(goal))


@router.delete("", response_model=MessageResponse)
def delete_monthly_goal(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2020, le=2100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    monthly_goal_service.delete_goal(db, user_id, month, year)
    return MessageResponse(message="Meta removida")
