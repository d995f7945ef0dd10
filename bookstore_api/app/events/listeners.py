"""
Listeners reacting to ``PurchaseEvent``.

Both run in the dispatcher's worker task after the purchase request has
already been answered.  Errors propagate to the dispatcher, which logs
them; the stored purchase is never rolled back.
"""

import logging
import uuid

from .purchase_event import PurchaseEvent

logger = logging.getLogger(__name__)


class GenerateNfeListener:
    """Assign an invoice number (nfe) to the new purchase."""

    def __init__(self, purchase_service) -> None:
        self.purchase_service = purchase_service

    async def listen(self, event: PurchaseEvent) -> None:
        purchase = event.purchase
        purchase.nfe = str(uuid.uuid4())
        await self.purchase_service.update(purchase)
        logger.info("Purchase %s invoiced as %s", purchase.id, purchase.nfe)


class UpdateSoldBookListener:
    """Mark the purchased books as sold."""

    def __init__(self, book_service) -> None:
        self.book_service = book_service

    async def listen(self, event: PurchaseEvent) -> None:
        await self.book_service.purchase(event.purchase.books)
