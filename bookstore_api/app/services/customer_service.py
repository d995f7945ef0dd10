"""
Business logic for customers.

Customers are never physically removed: ``delete_customer`` deletes the
customer's book listings and marks the customer ``INACTIVE``.  Because
inactive customers are still found by id, deleting twice is harmless.
"""

import logging
from typing import List, Optional

from ..core.errors import Errors, NotFoundError
from ..core.security import hash_password, verify_password
from ..models import Customer, CustomerStatus, Role
from ..repositories import CustomerRepository
from .book_service import BookService

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for the customer lifecycle."""

    def __init__(self, customer_repository: CustomerRepository, book_service: BookService) -> None:
        self.customer_repository = customer_repository
        self.book_service = book_service

    async def get_customers(self, name: Optional[str] = None) -> List[Customer]:
        """Return all customers, or those whose name contains ``name``.

        Matching is case-sensitive.  An empty string matches everyone.
        """
        if name is not None:
            return self.customer_repository.find_by_name_containing(name)
        return self.customer_repository.find_all()

    async def create_customer(self, customer: Customer) -> Customer:
        """Hash the plaintext password and store a new customer."""
        customer.password = hash_password(customer.password)
        self.customer_repository.save(customer)
        logger.info("Registered customer %s <%s>", customer.id, customer.email)
        return customer

    async def find_by_id(self, customer_id: int) -> Customer:
        customer = self.customer_repository.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError(Errors.ML1102.format(customer_id), Errors.ML1102.code)
        return customer

    async def put_customer(self, customer: Customer) -> Customer:
        """Overwrite an existing customer.

        ``customer.password`` must already be the stored hash; it is
        written as is.
        """
        if not self.customer_repository.exists_by_id(customer.id):
            raise NotFoundError(Errors.ML1102.format(customer.id), Errors.ML1102.code)
        self.customer_repository.save(customer)
        logger.info("Updated customer %s", customer.id)
        return customer

    async def delete_customer(self, customer_id: int) -> None:
        customer = await self.find_by_id(customer_id)
        await self.book_service.delete_by_customer(customer)
        customer.status = CustomerStatus.INACTIVE
        self.customer_repository.save(customer)
        logger.info("Customer %s set to %s", customer_id, customer.status.value)

    async def email_available(self, email: str, ignore_id: Optional[int] = None) -> bool:
        """True when no customer uses ``email``.

        With ``ignore_id`` the address also counts as available when it
        belongs to that customer.
        """
        if ignore_id is None:
            return not self.customer_repository.exists_by_email(email)
        owner = self.customer_repository.find_by_email(email)
        return owner is None or owner.id == ignore_id

    async def authenticate(self, email: str, password: str) -> Optional[Customer]:
        """Return the active customer matching the credentials, else ``None``."""
        customer = self.customer_repository.find_by_email(email)
        if customer is None or customer.status != CustomerStatus.ACTIVE:
            return None
        if not verify_password(password, customer.password):
            return None
        return customer

    async def ensure_admin(self, email: str, password: str) -> Customer:
        """Create an administrator account unless the email is already taken."""
        existing = self.customer_repository.find_by_email(email)
        if existing is not None:
            return existing
        admin = Customer(name="Administrator", email=email, password=password, roles={Role.CUSTOMER, Role.ADMIN})
        await self.create_customer(admin)
        logger.info("Bootstrapped administrator %s", email)
        return admin
