from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .book import Book
from .customer import Customer


@dataclass
class Purchase:
    """A completed purchase of one or more books by a customer.

    ``nfe`` (the invoice number) is empty when the purchase is first
    stored and is filled in asynchronously after the purchase event is
    dispatched.
    """

    customer: Customer
    books: List[Book] = field(default_factory=list)
    price: float = 0.0
    nfe: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def book_ids(self) -> List[int]:
        return [book.id for book in self.books]
