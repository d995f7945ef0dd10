"""
Customer endpoints for API v1.

Registration is public.  Listing is reserved to administrators; reading,
updating and deleting a single customer is allowed to the customer
themselves or to an administrator.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from bookstore_api.app.api.deps import get_customer_service
from bookstore_api.app.core.security import require_roles, user_can_only_access_their_own_resources
from bookstore_api.app.core.validation import validate_customer_create, validate_customer_update
from bookstore_api.app.models import Customer, Role
from bookstore_api.app.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from bookstore_api.app.services import CustomerService


router = APIRouter()


@router.get("", response_model=List[CustomerRead])
async def list_customers(
    name: Optional[str] = Query(None, description="Case-sensitive substring of the customer name"),
    customer_service: CustomerService = Depends(get_customer_service),
    current_user: Customer = Depends(require_roles(Role.ADMIN)),
) -> List[CustomerRead]:
    """List customers, optionally filtered by name."""
    customers = await customer_service.get_customers(name)
    return [CustomerRead.from_model(customer) for customer in customers]


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer: CustomerCreate,
    customer_service: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Register a new customer.

    Fails with 422 (ML-0001) when the name is blank, the email is
    malformed or already in use, or the password is blank.
    """
    result = await validate_customer_create(customer, customer_service)
    result.raise_for_errors()
    created = await customer_service.create_customer(customer.to_model())
    return CustomerRead.from_model(created)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(
    customer_id: int,
    customer_service: CustomerService = Depends(get_customer_service),
    current_user: Customer = Depends(user_can_only_access_their_own_resources),
) -> CustomerRead:
    customer = await customer_service.find_by_id(customer_id)
    return CustomerRead.from_model(customer)


@router.put("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_customer(
    customer_id: int,
    customer: CustomerUpdate,
    customer_service: CustomerService = Depends(get_customer_service),
    current_user: Customer = Depends(user_can_only_access_their_own_resources),
) -> None:
    """Replace a customer's name and email.

    The payload is validated before the customer is looked up, so an
    invalid payload yields 422 even for an unknown id.
    """
    result = await validate_customer_update(customer, customer_service, customer_id)
    result.raise_for_errors()
    saved = await customer_service.find_by_id(customer_id)
    await customer_service.put_customer(customer.to_model(saved))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int,
    customer_service: CustomerService = Depends(get_customer_service),
    current_user: Customer = Depends(user_can_only_access_their_own_resources),
) -> None:
    """Soft-delete a customer and delete the books they listed."""
    await customer_service.delete_customer(customer_id)
