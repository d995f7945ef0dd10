"""
Pydantic models for purchase payloads.
"""

from datetime import datetime
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from ..models import Purchase


class PurchaseCreate(BaseModel):
    """Schema for buying one or more books.

    ``book_ids`` is a set: a book listed twice is bought once.
    """

    customer_id: int = Field(..., gt=0, example=1)
    book_ids: Set[int] = Field(..., min_length=1, example=[1, 2])


class PurchaseRead(BaseModel):
    id: int
    customer_id: int
    book_ids: List[int]
    price: float
    nfe: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, purchase: Purchase) -> "PurchaseRead":
        return cls(
            id=purchase.id,
            customer_id=purchase.customer.id,
            book_ids=purchase.book_ids,
            price=purchase.price,
            nfe=purchase.nfe,
            created_at=purchase.created_at,
        )
