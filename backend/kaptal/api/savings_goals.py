"""
Savings goal API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.schemas.common import ApiResponse, MessageResponse
from kaptal.schemas.savings_goal import (
    DepositCreate,
    DepositResponse,
    DepositResult,
    SavingsGoalCreate,
    SavingsGoalProgress,
    SavingsGoalResponse,
    SavingsGoalUpdate,
)
from kaptal.services import savings_service

router = APIRouter(prefix="/savings-goals", tags=["savings-goals"])


@router.get("", response_model=ApiResponse[List[SavingsGoalProgress]])
def list_savings_goals(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Goals with progress, monthly requirement and the latest deposits."""
    items = []
    for goal, progress in savings_service.list_goals(db, user_id):
        base = SavingsGoalResponse.model_validate(goal).model_dump()
        deposits = [
            DepositResponse.model_validate(d)
            for d in goal.deposits[:savings_service.RECENT_DEPOSITS]
        ]
        items.append(SavingsGoalProgress(**base, **progress, deposits=deposits))
    return ApiResponse(data=items)


@router.post("", response_model=ApiResponse[SavingsGoalResponse], status_code=201)
def create_savings_goal(
    payload: SavingsGoalCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    goal = savings_service.create_goal(db, user_id, payload.model_dump())
    return ApiResponse(data=SavingsGoalResponse.model_validate(goal))


@router.put("/{goal_id}", response_model=ApiResponse[SavingsGoalResponse])
def update_savings_goal(
    goal_id: str,
    payload: SavingsGoalUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    goal = savings_service.update_goal(db, user_id, goal_id, payload.model_dump(exclude_unset=True))
    return ApiResponse(data=SavingsGoalResponse.model_validate(goal))


@router.delete("/{goal_id}", response_model=MessageResponse)
def delete_savings_goal(
    goal_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    savings_service.delete_goal(db, user_id, goal_id)
    return MessageResponse(message="Meta excluída com sucesso")


@router.post("/{goal_id}/deposit", response_model=ApiResponse[DepositResult], status_code=201)
def make_deposit(
    goal_id: str,
    payload: DepositCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Deposit into a goal; the goal total and completion flag move with it."""
    deposit, goal = savings_service.make_deposit(
        db, user_id, goal_id, payload.amount, payload.note, payload.date
    )
    return ApiResponse(data=DepositResult(
        deposit=DepositResponse.model_validate(deposit),
        goal=SavingsGoalResponse.model_validate(goal),
    ))


@router.get("/{goal_id}/deposits", response_model=ApiResponse[List[DepositResponse]])
def list_deposits(
    goal_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    deposits = savings_service.list_deposits(db, user_id, goal_id)
    return ApiResponse(data=[DepositResponse.model_validate(d) for d in deposits])


@router.delete("/{goal_id}/deposits/{deposit_id}", response_model=MessageResponse)
def delete_deposit(
    goal_id: str,
    deposit_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    savings_service.delete_deposit(db, user_id, goal_id, deposit_id)
    return MessageResponse(message="Depósito excluído com sucesso")
