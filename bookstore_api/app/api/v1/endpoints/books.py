"""
Book endpoints for API v1.

Browsing the catalogue is public; listing, editing and canceling books
requires an authenticated customer.
"""

from fastapi import APIRouter, Depends, Query, status

from bookstore_api.app.api.deps import get_book_service, get_customer_service
from bookstore_api.app.core.security import get_current_user
from bookstore_api.app.core.validation import validate_book
from bookstore_api.app.models import Customer
from bookstore_api.app.schemas.book import BookCreate, BookRead, BookUpdate
from bookstore_api.app.schemas.page import PageResponse
from bookstore_api.app.services import BookService, CustomerService


router = APIRouter()


def _to_read(book) -> BookRead:
    return BookRead.model_validate(book)


@router.post("", response_model=BookRead, status_code=status.HTTP_201_CREATED)
async def create_book(
    book: BookCreate,
    book_service: BookService = Depends(get_book_service),
    customer_service: CustomerService = Depends(get_customer_service),
    current_user: Customer = Depends(get_current_user),
) -> BookRead:
    """List a new book for sale.

    The selling customer must exist (404 ML-1102 otherwise).
    """
    validate_book(book).raise_for_errors()
    await customer_service.find_by_id(book.customer_id)
    return _to_read(await book_service.create(book.to_model()))


@router.get("", response_model=PageResponse[BookRead])
async def list_books(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    book_service: BookService = Depends(get_book_service),
) -> PageResponse[BookRead]:
    result = await book_service.find_all(page=page, size=size)
    return PageResponse[BookRead].from_page(result, _to_read)


@router.get("/active", response_model=PageResponse[BookRead])
async def list_active_books(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    book_service: BookService = Depends(get_book_service),
) -> PageResponse[BookRead]:
    """Books still available for purchase."""
    result = await book_service.find_actives(page=page, size=size)
    return PageResponse[BookRead].from_page(result, _to_read)


@router.get("/{book_id}", response_model=BookRead)
async def get_book(book_id: int, book_service: BookService = Depends(get_book_service)) -> BookRead:
    return _to_read(await book_service.find_by_id(book_id))


@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_book(
    book_id: int,
    updates: BookUpdate,
    book_service: BookService = Depends(get_book_service),
    current_user: Customer = Depends(get_current_user),
) -> None:
    """Partially update a book.

    Fails with 409 (ML-1002) when the book was canceled or deleted.
    """
    validate_book(updates, partial=True).raise_for_errors()
    book = await book_service.find_by_id(book_id)
    await book_service.update(updates.to_model(book))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: int,
    book_service: BookService = Depends(get_book_service),
    current_user: Customer = Depends(get_current_user),
) -> None:
    """Cancel a book listing."""
    await book_service.delete_book(book_id)
