"""
Category database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from kaptal.database import Base


class Category(Base):
    """Category model with one level of nesting."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    parent_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    color = Column(String(7), nullable=False, default="#6366f1")  # Hex color
    icon = Column(String(50), nullable=False, default="📦")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")
    transactions = relationship("Transaction", back_populates="category")
    budgets = relationship("CategoryBudget", back_populates="category", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_category_user_parent", "user_id", "parent_id"),
    )
