"""
SQLite-backed store for books.

Listing methods take ``limit``/``offset`` and have a matching
``count_*`` method so services can build pages.
"""

import sqlite3
from typing import Iterable, List, Optional

from ..core.db import get_connection, get_cursor
from ..models import Book, BookStatus

_COLUMNS = "id, name, price, status, customer_id"


def _row_to_book(row: sqlite3.Row) -> Book:
    return Book(
        id=row["id"],
        name=row["name"],
        price=row["price"],
        status=BookStatus(row["status"]),
        customer_id=row["customer_id"],
    )


class BookRepository:
    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    @staticmethod
    def _save(cursor: sqlite3.Cursor, book: Book) -> None:
        if book.id is None:
            cursor.execute(
                "INSERT INTO books (name, price, status, customer_id) VALUES (?, ?, ?, ?)",
                (book.name, book.price, book.status.value, book.customer_id),
            )
            book.id = cursor.lastrowid
        else:
            cursor.execute(
                "UPDATE books SET name = ?, price = ?, status = ?, customer_id = ?, "
                "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (book.name, book.price, book.status.value, book.customer_id, book.id),
            )

    def save(self, book: Book) -> Book:
        with get_cursor(self.db_path) as cursor:
            self._save(cursor, book)
        return book

    def save_all(self, books: Iterable[Book]) -> List[Book]:
        """Persist several books in a single transaction."""
        books = list(books)
        with get_cursor(self.db_path) as cursor:
            for book in books:
                self._save(cursor, book)
        return books

    def find_all(self, limit: int, offset: int) -> List[Book]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books ORDER BY id LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [_row_to_book(row) for row in rows]
        finally:
            conn.close()

    def count_all(self) -> int:
        conn = get_connection(self.db_path)
        try:
            return conn.execute("SELECT COUNT(*) AS count FROM books").fetchone()["count"]
        finally:
            conn.close()

    def find_by_status(self, status: BookStatus, limit: int, offset: int) -> List[Book]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE status = ? ORDER BY id LIMIT ? OFFSET ?",
                (status.value, limit, offset),
            ).fetchall()
            return [_row_to_book(row) for row in rows]
        finally:
            conn.close()

    def count_by_status(self, status: BookStatus) -> int:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT COUNT(*) AS count FROM books WHERE status = ?", (status.value,)).fetchone()
            return row["count"]
        finally:
            conn.close()

    def find_by_id(self, book_id: int) -> Optional[Book]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,)).fetchone()
            return _row_to_book(row) if row else None
        finally:
            conn.close()

    def find_all_by_ids(self, book_ids: Iterable[int]) -> List[Book]:
        """Return the books among ``book_ids`` that exist, ordered by id."""
        ids = sorted(set(book_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE id IN ({placeholders}) ORDER BY id",
                tuple(ids),
            ).fetchall()
            return [_row_to_book(row) for row in rows]
        finally:
            conn.close()

    def find_by_customer_id(self, customer_id: int) -> List[Book]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE customer_id = ? ORDER BY id",
                (customer_id,),
            ).fetchall()
            return [_row_to_book(row) for row in rows]
        finally:
            conn.close()
