"""
Income distribution rule models.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, String, Integer, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship
from kaptal.database import Base


class IncomeRule(Base):
    """
    A named bucket that receives `percentage`% of the month's base income.

    Rules are scoped to (user_id, month, year). `base_income` is repeated on
    every rule of the same month and is only ever written through
    `income_rule_service.set_month_base_income`.
    """

    __tablename__ = "income_rules"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False)
    name = Column(String(100), nullable=False)
    percentage = Column(Numeric(5, 2), nullable=False)
    color = Column(String(7), nullable=False, default="#6366f1")
    icon = Column(String(50), nullable=False, default="💰")
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    base_income = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    items = relationship(
        "RuleItem",
        back_populates="rule",
        cascade="all, delete-orphan",
        order_by="RuleItem.created_at",
    )
    transactions = relationship("Transaction", back_populates="income_rule")

    __table_args__ = (
        Index("idx_income_rule_period", "user_id", "year", "month"),
    )


class RuleItem(Base):
    """Fixed-amount sub-allocation inside a rule (e.g. the water bill)."""

    __tablename__ = "rule_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    rule_id = Column(String(36), ForeignKey("income_rules.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    rule = relationship("IncomeRule", back_populates="items")
    transactions = relationship("Transaction", back_populates="rule_item")
