"""
Statistics schemas.
"""

from datetime import datetime
from typing import List, Literal, Optional

from kaptal.schemas.common import CamelModel
from kaptal.schemas.transaction import TransactionResponse


class Period(CamelModel):
    start: datetime
    end: datetime


class Overview(CamelModel):
    income: float
    expense: float
    balance: float
    recent_transactions: List[TransactionResponse]
    period: Period


class CategoryStat(CamelModel):
    category_id: Optional[str]
    category_name: str
    category_icon: str
    category_color: str
    parent_id: Optional[str]
    parent_name: Optional[str]
    total: float


class CategoryStats(CamelModel):
    stats: List[CategoryStat]
    total: float
    period: Period


class MonthHistory(CamelModel):
    month: int
    year: int
    income: float
    expense: float


class EndOfMonthProjection(CamelModel):
    projected: float
    current: float
    days_remaining: int


class SavingsStreak(CamelModel):
    current: int
    best: int
    last_month_result: Literal["success", "fail", "pending"]


class Insights(CamelModel):
    balance: float
    daily_average: float
    days_until_broke: Optional[int]
    end_of_month_projection: EndOfMonthProjection
    savings_streak: SavingsStreak
