"""
Administrator-only endpoints for API v1.
"""

from fastapi import APIRouter, Depends

from bookstore_api.app.core.security import require_roles
from bookstore_api.app.models import Customer, Role


router = APIRouter()


@router.get("/report")
async def get_report(current_user: Customer = Depends(require_roles(Role.ADMIN))) -> str:
    return "This is a report! only admins can see it."
