"""
Persistence layer.

Each repository wraps one aggregate's tables in the SQLite database and
converts rows to the dataclasses in ``models``.  Repositories receive
the database path through their constructor and open a connection per
operation, so each call is its own transaction.
"""

from .book_repository import BookRepository
from .customer_repository import CustomerRepository
from .purchase_repository import PurchaseRepository

__all__ = ["BookRepository", "CustomerRepository", "PurchaseRepository"]
