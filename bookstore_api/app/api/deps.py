"""
FastAPI dependencies resolving the application's service objects.

``create_app`` stores the wired services on ``app.state``; handlers ask
for them with ``Depends(get_customer_service)`` and friends, which also
lets tests override them through ``app.dependency_overrides``.
"""

from fastapi import Request

from ..core.config import Settings
from ..services import BookService, CustomerService, PurchaseService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_customer_service(request: Request) -> CustomerService:
    return request.app.state.customer_service


def get_book_service(request: Request) -> BookService:
    return request.app.state.book_service


def get_purchase_service(request: Request) -> PurchaseService:
    return request.app.state.purchase_service
