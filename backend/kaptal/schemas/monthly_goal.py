"""
Monthly spending goal schemas.
"""

from pydantic import Field
from decimal import Decimal
from typing import Optional

from kaptal.schemas.common import CamelModel


class MonthlyGoalSet(CamelModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020, le=2100)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class MonthlyGoalResponse(CamelModel):
    id: str
    month: int
    year: int
    amount: float


class MonthlyGoalStatus(CamelModel):
    """Goal of the month (if any) against what was actually spent."""
    goal: Optional[MonthlyGoalResponse]
    spent: float
    remaining: Optional[float]
    percentage: Optional[float]
    month: int
    year: int
