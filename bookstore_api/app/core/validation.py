"""
Explicit validation pass for request payloads.

Pydantic guarantees shapes and types; the rules here need business
context (is the email already taken?) or produce the bookstore's own
field messages.  Each ``validate_*`` function returns a
``ValidationResult``; endpoints call ``raise_for_errors`` on it.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import FieldError, ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class ValidationResult:
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(message=message, field=field_name))

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ValidationError(self.errors)


def _check_name(result: ValidationResult, name: Optional[str]) -> None:
    if name is None or not name.strip():
        result.add("name", "Name must be informed")


def _check_email_format(result: ValidationResult, email: Optional[str]) -> bool:
    if not email or not EMAIL_PATTERN.match(email):
        result.add("email", "E-mail must be valid")
        return False
    return True


async def validate_customer_create(data, customer_service) -> ValidationResult:
    """Validate a new customer: name, email format and availability, password."""
    result = ValidationResult()
    _check_name(result, data.name)
    if _check_email_format(result, data.email) and not await customer_service.email_available(data.email):
        result.add("email", "E-mail already in use")
    if not data.password or not data.password.strip():
        result.add("password", "Password must be informed")
    return result


async def validate_customer_update(data, customer_service, customer_id: int) -> ValidationResult:
    """Validate a customer update.

    The customer's own current address does not count as taken, so it
    can be resubmitted unchanged.
    """
    result = ValidationResult()
    _check_name(result, data.name)
    if _check_email_format(result, data.email) and not await customer_service.email_available(
        data.email, ignore_id=customer_id
    ):
        result.add("email", "E-mail already in use")
    return result


def validate_book(data, partial: bool = False) -> ValidationResult:
    """Validate book fields; with ``partial`` only the supplied ones."""
    result = ValidationResult()
    if not partial or data.name is not None:
        _check_name(result, data.name)
    if not partial or data.price is not None:
        if data.price is None or data.price <= 0:
            result.add("price", "Price must be greater than zero")
    return result
