"""Authentication endpoints for the PostDesk API

Staff sign in to get a session token and sign out to revoke it. Guests never
authenticate.
"""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.staff_user import StaffUser
from .schemas import LoginRequest, LoginResponse, MeResponse, StaffResponse
from .password import verify_password
from .jwt import create_access_token, _get_jwt_expiry_minutes
from .dependencies import CurrentStaff, get_token_claims
from .revocation import revoked_tokens

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Authenticate a staff member and return a session token.

    Security measures:
    - Constant-time password verification (Argon2id)
    - Same message for unknown email and wrong password
    - Disabled accounts are rejected
    - last_login_at is updated on successful login

    Raises:
        HTTPException: 401 if credentials are invalid or account is disabled
    """
    user = (
        await db.execute(select(StaffUser).where(StaffUser.email == credentials.email.lower()))
    ).scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning("Staff login failed: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"  # Generic message to prevent enumeration
        )

    if user.status == 'DISABLED':
        logger.warning(f"Staff login failed: account {user.id} disabled")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled"
        )

    user.last_login_at = datetime.now(timezone.utc)
    await db.commit()

    logger.info(f"Staff {user.id} signed in")

    return LoginResponse(
        access_token=create_access_token(user_id=user.id, email=user.email),
        token_type="bearer",
        expires_in=_get_jwt_expiry_minutes() * 60,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(claims: Annotated[dict, Depends(get_token_claims)]):
    """Sign out: the presented token is treated as anonymous from now on."""
    revoked_tokens.revoke(claims["jti"], float(claims["exp"]))
    logger.info(f"Staff {claims['sub']} signed out")


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: CurrentStaff):
    """Return the profile of the signed-in staff member."""
    return MeResponse(user=StaffResponse.model_validate(current_user))
