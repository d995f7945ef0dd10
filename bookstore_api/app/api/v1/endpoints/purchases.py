"""
Purchase endpoint for API v1.

The response is sent as soon as the purchase is stored.  The invoice
number and the books' ``SOLD`` status are filled in afterwards by the
purchase event listeners.
"""

from fastapi import APIRouter, Depends, status

from bookstore_api.app.api.deps import get_purchase_service
from bookstore_api.app.core.security import check_owner_or_admin, get_current_user
from bookstore_api.app.models import Customer
from bookstore_api.app.schemas.purchase import PurchaseCreate, PurchaseRead
from bookstore_api.app.services import PurchaseService


router = APIRouter()


@router.post("", response_model=PurchaseRead, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    payload: PurchaseCreate,
    purchase_service: PurchaseService = Depends(get_purchase_service),
    current_user: Customer = Depends(get_current_user),
) -> PurchaseRead:
    """Buy one or more books.

    Customers may only buy for themselves; administrators may buy on
    behalf of anyone.  Unknown customers or books yield 404.
    """
    check_owner_or_admin(current_user, payload.customer_id)
    purchase = await purchase_service.build_purchase(payload.customer_id, payload.book_ids)
    await purchase_service.create_purchase(purchase)
    return PurchaseRead.from_model(purchase)
