"""
Pydantic models for customer payloads.

Passwords are accepted on creation only and are never returned.  Field
rules beyond types (blank names, email format, email already in use)
are checked by ``core.validation`` so they share the bookstore's error
format.
"""

from typing import List

from pydantic import BaseModel, Field

from ..models import Customer, CustomerStatus, Role


class CustomerBase(BaseModel):
    name: str = Field(..., example="Gustavo Lima")
    email: str = Field(..., example="gustavo@example.com")


class CustomerCreate(CustomerBase):
    """Schema for registering a customer."""

    password: str = Field(..., example="strongpassword")

    def to_model(self) -> Customer:
        return Customer(name=self.name, email=self.email, password=self.password)


class CustomerUpdate(CustomerBase):
    """Schema for replacing a customer's name and email.

    Status, roles and password are not editable through this payload.
    """

    def to_model(self, previous: Customer) -> Customer:
        return Customer(
            id=previous.id,
            name=self.name,
            email=self.email,
            password=previous.password,
            status=previous.status,
            roles=set(previous.roles),
        )


class CustomerRead(CustomerBase):
    """Schema for reading a customer from the API."""

    id: int
    status: CustomerStatus
    roles: List[Role] = Field(default_factory=list)

    @classmethod
    def from_model(cls, customer: Customer) -> "CustomerRead":
        return cls(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            status=customer.status,
            roles=sorted(customer.roles, key=lambda role: role.value),
        )
