"""
Business logic for books.

Besides the usual lifecycle (create, list, update, cancel) the service
owns two bulk transitions triggered from elsewhere: ``delete_by_customer``
when a customer is soft-deleted and ``purchase`` when the purchase event
is handled.
"""

import logging
from typing import Iterable, List

from ..core.errors import ConflictError, Errors, NotFoundError
from ..models import Book, BookStatus, Customer, Page
from ..models.book import LOCKED_STATUSES
from ..repositories import BookRepository

logger = logging.getLogger(__name__)


class BookService:
    """Service for managing the book catalogue."""

    def __init__(self, book_repository: BookRepository) -> None:
        self.book_repository = book_repository

    async def create(self, book: Book) -> Book:
        book.status = BookStatus.ACTIVE
        self.book_repository.save(book)
        logger.info("Customer %s listed book %s '%s'", book.customer_id, book.id, book.name)
        return book

    async def find_all(self, page: int = 0, size: int = 10) -> Page[Book]:
        items = self.book_repository.find_all(limit=size, offset=page * size)
        return Page(items=items, page=page, size=size, total_items=self.book_repository.count_all())

    async def find_actives(self, page: int = 0, size: int = 10) -> Page[Book]:
        items = self.book_repository.find_by_status(BookStatus.ACTIVE, limit=size, offset=page * size)
        total = self.book_repository.count_by_status(BookStatus.ACTIVE)
        return Page(items=items, page=page, size=size, total_items=total)

    async def find_by_id(self, book_id: int) -> Book:
        book = self.book_repository.find_by_id(book_id)
        if book is None:
            raise NotFoundError(Errors.ML1001.format(book_id), Errors.ML1001.code)
        return book

    async def find_all_by_ids(self, book_ids: Iterable[int]) -> List[Book]:
        """Return every requested book; fail on the first id that does not exist."""
        wanted = sorted(set(book_ids))
        books = self.book_repository.find_all_by_ids(wanted)
        found = {book.id for book in books}
        for book_id in wanted:
            if book_id not in found:
                raise NotFoundError(Errors.ML1001.format(book_id), Errors.ML1001.code)
        return books

    async def delete_book(self, book_id: int) -> None:
        """Cancel a book listing.  The record is kept with status ``CANCELED``."""
        book = await self.find_by_id(book_id)
        book.status = BookStatus.CANCELED
        self.book_repository.save(book)
        logger.info("Book %s canceled", book_id)

    async def update(self, book: Book) -> Book:
        """Overwrite a book.

        Raises ``ConflictError`` (ML-1002) when the stored book is already
        canceled or deleted, and ``NotFoundError`` when it does not exist.
        """
        stored = await self.find_by_id(book.id)
        if stored.status in LOCKED_STATUSES:
            raise ConflictError(Errors.ML1002.format(stored.status.value), Errors.ML1002.code)
        return self.book_repository.save(book)

    async def delete_by_customer(self, customer: Customer) -> None:
        books = self.book_repository.find_by_customer_id(customer.id)
        for book in books:
            book.status = BookStatus.DELETED
        self.book_repository.save_all(books)
        logger.info("Deleted %d book(s) of customer %s", len(books), customer.id)

    async def purchase(self, books: Iterable[Book]) -> None:
        """Flag purchased books as ``SOLD``.

        The books are written back as received.  Two purchases of the same
        book are not serialised; the last writer wins.
        """
        books = list(books)
        for book in books:
            book.status = BookStatus.SOLD
        self.book_repository.save_all(books)
        logger.info("Marked book(s) %s as sold", [book.id for book in books])
