"""
Category budget schemas.
"""

from pydantic import Field
from decimal import Decimal
from typing import List, Optional

from kaptal.schemas.common import CamelModel


class CategoryBudgetSet(CamelModel):
    category_id: str
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020, le=2100)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class CategoryBudgetResponse(CamelModel):
    id: str
    category_id: str
    month: int
    year: int
    amount: float


class CategoryBudgetLine(CamelModel):
    id: str
    category_id: str
    category_name: str
    category_icon: Optional[str]
    category_color: Optional[str]
    budget: float
    spent: float
    remaining: float
    percentage: float


class CategoryBudgetTotals(CamelModel):
    total_budget: float
    total_spent: float
    percentage: float
    savings: float


class CategoryBudgetSummary(CamelModel):
    budgets: List[CategoryBudgetLine]
    totals: CategoryBudgetTotals
    month: int
    year: int
