"""
Category Pydantic schemas for API validation.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional

from kaptal.schemas.common import CamelModel


class CategoryBase(CamelModel):
    """Base category schema."""
    name: str = Field(..., min_length=1, max_length=100)
    parent_id: Optional[str] = None
    color: str = Field("#6366f1", pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: str = Field("📦", max_length=50)


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""
    pass


class CategoryUpdate(CamelModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    parent_id: Optional[str] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: Optional[str] = Field(None, max_length=50)


class CategoryResponse(CategoryBase):
    """Schema for category response."""
    id: str
    created_at: datetime
    children: list["CategoryResponse"] = []


# Enable forward references for recursive model
CategoryResponse.model_rebuild()
