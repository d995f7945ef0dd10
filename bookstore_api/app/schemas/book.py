"""
Pydantic models for book payloads.
"""

from dataclasses import replace
from typing import Optional

from pydantic import BaseModel, Field

from ..models import Book, BookStatus


class BookCreate(BaseModel):
    """Schema for listing a new book on behalf of a customer."""

    name: str = Field(..., example="Dom Casmurro")
    price: float = Field(..., example=29.9)
    customer_id: int = Field(..., example=1, description="ID of the customer selling the book")

    def to_model(self) -> Book:
        return Book(name=self.name, price=self.price, customer_id=self.customer_id)


class BookUpdate(BaseModel):
    """Schema for a partial book update.  Omitted fields are kept."""

    name: Optional[str] = Field(None, example="Dom Casmurro (2nd edition)")
    price: Optional[float] = Field(None, example=34.5)

    def to_model(self, previous: Book) -> Book:
        changes = self.model_dump(exclude_none=True)
        return replace(previous, **changes)


class BookRead(BaseModel):
    id: int
    name: str
    price: float
    status: BookStatus
    customer_id: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }
