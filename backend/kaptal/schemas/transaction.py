"""
Transaction schemas.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from kaptal.models.transaction import TransactionType
from kaptal.schemas.common import CamelModel


class TransactionBase(CamelModel):
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    type: TransactionType = TransactionType.EXPENSE
    category_id: Optional[str] = None
    income_rule_id: Optional[str] = None
    rule_item_id: Optional[str] = None


class TransactionCreate(TransactionBase):
    date: Optional[datetime] = None


class TransactionUpdate(CamelModel):
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    type: Optional[TransactionType] = None
    date: Optional[datetime] = None
    category_id: Optional[str] = None
    income_rule_id: Optional[str] = None
    rule_item_id: Optional[str] = None


class TransactionResponse(CamelModel):
    id: str
    description: str
    amount: float
    type: TransactionType
    date: datetime
    category_id: Optional[str]
    income_rule_id: Optional[str]
    rule_item_id: Optional[str]
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class TransactionListResponse(CamelModel):
    items: list[TransactionResponse]
    pagination: Pagination
