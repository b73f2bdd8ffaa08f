"""
AI summary schemas.
"""

from pydantic import Field
from typing import Optional

from kaptal.schemas.common import CamelModel


class SummaryRequest(CamelModel):
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=2020, le=2100)


class MonthTotals(CamelModel):
    income: float
    expenses: float
    balance: float


class SummaryResponse(CamelModel):
    month: int
    year: int
    totals: MonthTotals
    summary: str
