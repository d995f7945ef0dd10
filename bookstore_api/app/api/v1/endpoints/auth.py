"""
Login endpoint for API v1.

Exchanges an email and password for a bearer token.  Inactive
(soft-deleted) customers cannot log in.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from bookstore_api.app.api.deps import get_customer_service, get_settings
from bookstore_api.app.core.config import Settings
from bookstore_api.app.core.security import create_access_token
from bookstore_api.app.schemas.auth import LoginRequest, Token
from bookstore_api.app.services import CustomerService


router = APIRouter()


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    customer_service: CustomerService = Depends(get_customer_service),
    settings: Settings = Depends(get_settings),
) -> Token:
    customer = await customer_service.authenticate(credentials.email, credentials.password)
    if not customer:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return Token(access_token=create_access_token({"sub": customer.email}, settings))
