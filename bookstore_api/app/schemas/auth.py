"""
Pydantic models for the login endpoint.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., example="gustavo@example.com")
    password: str = Field(..., example="strongpassword")


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
