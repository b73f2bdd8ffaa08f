"""
Shared schema building blocks: camelCase wire names and the response envelope.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys; accepts snake_case too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """`{success, data, message}` envelope returned by every endpoint."""
    success: bool = True
    data: T
    message: Optional[str] = None


class MessageResponse(BaseModel):
    """Envelope for operations that only report an outcome."""
    success: bool = True
    message: str
