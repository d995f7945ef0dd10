"""
Service layer.

Each service encapsulates the business rules for one domain and
receives its collaborators (repositories, other services, the event
dispatcher) through its constructor.  ``main.create_app`` builds the
object graph once per application.
"""

from .book_service import BookService
from .customer_service import CustomerService
from .purchase_service import PurchaseService

__all__ = ["BookService", "CustomerService", "PurchaseService"]
