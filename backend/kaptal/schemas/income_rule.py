"""
Income rule schemas.
"""

from pydantic import Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from kaptal.schemas.common import CamelModel
from kaptal.schemas.transaction import TransactionResponse


class IncomeRuleCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    percentage: Decimal = Field(..., ge=0, le=100, decimal_places=2)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: Optional[str] = Field(None, max_length=50)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020, le=2100)
    base_income: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class IncomeRuleUpdate(CamelModel):
    """Partial update; only fields sent by the client are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    percentage: Optional[Decimal] = Field(None, ge=0, le=100, decimal_places=2)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: Optional[str] = Field(None, max_length=50)
    base_income: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class RuleItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class RuleItemUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class CopyRulesRequest(CamelModel):
    from_month: int = Field(..., ge=1, le=12)
    from_year: int = Field(..., ge=2020, le=2100)
    to_month: int = Field(..., ge=1, le=12)
    to_year: int = Field(..., ge=2020, le=2100)
    base_income: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class ResetRulesRequest(CamelModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020, le=2100)
    base_income: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class RuleItemResponse(CamelModel):
    id: str
    rule_id: str
    name: str
    amount: float
    created_at: datetime


class IncomeRuleResponse(CamelModel):
    id: str
    name: str
    percentage: float
    color: str
    icon: str
    month: int
    year: int
    base_income: float
    items: List[RuleItemResponse] = []
    created_at: datetime


class RuleItemSpending(CamelModel):
    id: str
    rule_id: str
    name: str
    amount: float
    spent: float
    remaining: float
    percentage_used: float
    is_over_budget: bool


class IncomeRuleSpending(CamelModel):
    id: str
    name: str
    percentage: float
    color: str
    icon: str
    month: int
    year: int
    base_income: float
    budget_amount: float
    spent: float
    remaining: float
    percentage_used: float
    is_over_budget: bool
    items: List[RuleItemSpending]


class IncomeRuleSummary(CamelModel):
    rules: List[IncomeRuleSpending]
    total_percentage: float
    base_income: float
    using_fallback: bool
    month: int
    year: int
    requested_month: int
    requested_year: int


class SpendingDetail(CamelModel):
    """Spending drill-down for one rule or one item in its own month."""
    id: str
    name: str
    month: int
    year: int
    budget: float
    spent: float
    remaining: float
    percentage_used: float
    is_over_budget: bool
    transactions: List[TransactionResponse]
