"""
SQLite-backed store for purchases.

A purchase row references its customer; the purchased books are kept in
the ``purchase_books`` link table.  Loading a purchase rebuilds the
full ``Purchase`` through the customer and book repositories.
"""

from datetime import datetime
from typing import Optional

from ..core.db import get_connection, get_cursor
from ..models import Purchase
from .book_repository import BookRepository
from .customer_repository import CustomerRepository


class PurchaseRepository:
    def __init__(
        self,
        db_path: str,
        customer_repository: CustomerRepository,
        book_repository: BookRepository,
    ) -> None:
        self.db_path = db_path
        self.customer_repository = customer_repository
        self.book_repository = book_repository

    def save(self, purchase: Purchase) -> Purchase:
        """Insert a purchase with its book links, or update nfe and price.

        The set of books is fixed at creation; updates never touch
        ``purchase_books``.
        """
        with get_cursor(self.db_path) as cursor:
            if purchase.id is None:
                cursor.execute(
                    "INSERT INTO purchases (customer_id, nfe, price) VALUES (?, ?, ?)",
                    (purchase.customer.id, purchase.nfe, purchase.price),
                )
                purchase.id = cursor.lastrowid
                cursor.executemany(
                    "INSERT OR IGNORE INTO purchase_books (purchase_id, book_id) VALUES (?, ?)",
                    [(purchase.id, book_id) for book_id in purchase.book_ids],
                )
                row = cursor.execute(
                    "SELECT created_at FROM purchases WHERE id = ?", (purchase.id,)
                ).fetchone()
                purchase.created_at = datetime.fromisoformat(row["created_at"])
            else:
                cursor.execute(
                    "UPDATE purchases SET nfe = ?, price = ? WHERE id = ?",
                    (purchase.nfe, purchase.price, purchase.id),
                )
        return purchase

    def find_by_id(self, purchase_id: int) -> Optional[Purchase]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT id, customer_id, nfe, price, created_at FROM purchases WHERE id = ?",
                (purchase_id,),
            ).fetchone()
            if not row:
                return None
            book_rows = conn.execute(
                "SELECT book_id FROM purchase_books WHERE purchase_id = ?", (purchase_id,)
            ).fetchall()
        finally:
            conn.close()
        return Purchase(
            id=row["id"],
            customer=self.customer_repository.find_by_id(row["customer_id"]),
            books=self.book_repository.find_all_by_ids(r["book_id"] for r in book_rows),
            nfe=row["nfe"],
            price=row["price"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
