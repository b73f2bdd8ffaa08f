"""
Transaction database model.
"""

import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Numeric, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship
from kaptal.database import Base


class TransactionType(str, enum.Enum):
    """Transaction direction. Amounts are always stored positive."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(Enum(TransactionType), nullable=False, default=TransactionType.EXPENSE)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    # Independent tags, a transaction may carry any combination of them
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    income_rule_id = Column(String(36), ForeignKey("income_rules.id"), nullable=True)
    rule_item_id = Column(String(36), ForeignKey("rule_items.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="transactions")
    income_rule = relationship("IncomeRule", back_populates="transactions")
    rule_item = relationship("RuleItem", back_populates="transactions")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_user_date", "user_id", "date"),
        Index("idx_transaction_category", "category_id"),
        Index("idx_transaction_income_rule", "income_rule_id"),
        Index("idx_transaction_rule_item", "rule_item_id"),
    )
