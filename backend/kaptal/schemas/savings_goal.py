"""
Savings goal schemas.
"""

from pydantic import Field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from kaptal.schemas.common import CamelModel


class SavingsGoalCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    deadline: date
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")


class SavingsGoalUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    deadline: Optional[date] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    is_completed: Optional[bool] = None


class DepositCreate(CamelModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    note: Optional[str] = Field(None, max_length=500)
    date: Optional[datetime] = None


class DepositResponse(CamelModel):
    id: str
    goal_id: str
    amount: float
    note: Optional[str]
    date: datetime


class SavingsGoalResponse(CamelModel):
    id: str
    name: str
    target_amount: float
    current_amount: float
    deadline: date
    icon: str
    color: str
    is_completed: bool
    created_at: datetime


class SavingsGoalProgress(SavingsGoalResponse):
    progress: float
    remaining: float
    months_remaining: int
    monthly_required: float
    status: Literal["on_track", "behind", "completed", "overdue"]
    deposits: List[DepositResponse]


class DepositResult(CamelModel):
    deposit: DepositResponse
    goal: SavingsGoalResponse
