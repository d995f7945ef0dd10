"""
Top‑level router for version 1 of the API.

Aggregates the domain routers.  When a new domain is introduced,
include its router here.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, books, customers, purchases

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(purchases.router, prefix="/purchase", tags=["purchases"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
