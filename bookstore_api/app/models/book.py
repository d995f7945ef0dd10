from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BookStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SOLD = "SOLD"
    CANCELED = "CANCELED"
    DELETED = "DELETED"


# Books in these states can no longer be edited.
LOCKED_STATUSES = frozenset({BookStatus.CANCELED, BookStatus.DELETED})


@dataclass
class Book:
    name: str
    price: float
    customer_id: Optional[int] = None
    status: BookStatus = BookStatus.ACTIVE
    id: Optional[int] = None
