"""Pydantic schemas for authentication endpoints"""

from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from datetime import datetime
from typing import Optional


class LoginRequest(BaseModel):
    """Request schema for staff login.

    Attributes:
        email: Staff email address
        password: Plain text password, verified against the stored hash
    """
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response schema for successful login.

    Attributes:
        access_token: Session token (JWT)
        token_type: Token type (always "bearer")
        expires_in: Token lifetime in seconds
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class StaffResponse(BaseModel):
    """Staff profile (never includes password_hash)."""
    id: UUID
    email: str
    name: str
    status: str
    last_login_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


class MeResponse(BaseModel):
    """Response schema for GET /auth/me."""
    user: StaffResponse
