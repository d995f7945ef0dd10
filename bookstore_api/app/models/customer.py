from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set


class CustomerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Role(str, Enum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


@dataclass
class Customer:
    """A registered customer.

    ``password`` always holds the PBKDF2 hash once the customer has been
    stored.  Customers are never removed; deletion flips ``status`` to
    ``INACTIVE``.
    """

    name: str
    email: str
    password: str
    status: CustomerStatus = CustomerStatus.ACTIVE
    roles: Set[Role] = field(default_factory=lambda: {Role.CUSTOMER})
    id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles
