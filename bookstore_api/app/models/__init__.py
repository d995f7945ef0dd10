"""
Domain entities.

Plain dataclasses passed between repositories, services and event
listeners.  API payloads live in ``schemas``; keeping the two apart
lets the HTTP representation change without touching persistence.
"""

from .book import Book, BookStatus
from .customer import Customer, CustomerStatus, Role
from .page import Page
from .purchase import Purchase

__all__ = ["Book", "BookStatus", "Customer", "CustomerStatus", "Role", "Page", "Purchase"]
