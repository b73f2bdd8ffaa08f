"""
Savings goal database models.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, String, Boolean, Date, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship
from kaptal.database import Base


class SavingsGoal(Base):
    """Savings goal with a running total kept in sync with its deposits."""

    __tablename__ = "savings_goals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    current_amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    deadline = Column(Date, nullable=False)
    icon = Column(String(50), nullable=False, default="🎯")
    color = Column(String(7), nullable=False, default="#6366f1")
    is_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    deposits = relationship(
        "SavingsDeposit",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="SavingsDeposit.date.desc()",
    )


class SavingsDeposit(Base):
    """Single deposit into a savings goal."""

    __tablename__ = "savings_deposits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    goal_id = Column(String(36), ForeignKey("savings_goals.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    goal = relationship("SavingsGoal", back_populates="deposits")
