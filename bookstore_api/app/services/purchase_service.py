"""
Business logic for purchases.

``create_purchase`` stores the purchase and publishes a ``PurchaseEvent``.
It does not wait for the listeners (invoice number, sold books) and
never learns whether they succeeded.
"""

import logging
from typing import Iterable

from ..events import EventDispatcher, PurchaseEvent
from ..models import Purchase
from ..repositories import PurchaseRepository
from .book_service import BookService
from .customer_service import CustomerService

logger = logging.getLogger(__name__)


class PurchaseService:
    def __init__(
        self,
        purchase_repository: PurchaseRepository,
        customer_service: CustomerService,
        book_service: BookService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.purchase_repository = purchase_repository
        self.customer_service = customer_service
        self.book_service = book_service
        self.dispatcher = dispatcher

    async def build_purchase(self, customer_id: int, book_ids: Iterable[int]) -> Purchase:
        """Resolve the customer and books of a purchase request.

        Duplicated book ids count once.  Raises ``NotFoundError`` for an
        unknown customer (ML-1102) or book (ML-1001).
        """
        customer = await self.customer_service.find_by_id(customer_id)
        books = await self.book_service.find_all_by_ids(book_ids)
        price = round(sum(book.price for book in books), 2)
        return Purchase(customer=customer, books=books, price=price)

    async def create_purchase(self, purchase: Purchase) -> Purchase:
        self.purchase_repository.save(purchase)
        logger.info(
            "Customer %s purchased book(s) %s for %.2f (purchase %s)",
            purchase.customer.id,
            purchase.book_ids,
            purchase.price,
            purchase.id,
        )
        self.dispatcher.publish(PurchaseEvent(purchase))
        return purchase

    async def update(self, purchase: Purchase) -> Purchase:
        return self.purchase_repository.save(purchase)
