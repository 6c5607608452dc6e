"""FastAPI dependencies for the access gate.

This module provides dependency injection functions for:
- Reading the optional bearer token from requests
- Classifying the caller (authenticated staff vs. anonymous guest)
- Gating routes on the permission matrix
- Loading the current staff user for staff-only endpoints

Usage:
    @router.get("/mail")
    async def browse(staff: StaffUser = Depends(get_current_staff)):
        ...

    @router.get("/public/mail")
    async def lookup(level: AccessLevel = Depends(get_access_level)):
        ...
"""

from typing import Annotated, Optional
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.staff_user import StaffUser
from .gate import STAFF_HOME, AccessLevel, MailAction, classify_session, is_permitted
from .jwt import decode_token
from .revocation import revoked_tokens


# Guests send no token, so a missing header must not fail the request here
security = HTTPBearer(auto_error=False)

_UNAUTHORIZED = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Not authenticated",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Return the raw bearer token, or None when the caller sent none."""
    if credentials is None:
        return None
    return credentials.credentials


def get_access_level(token: Optional[str] = Depends(get_session_token)) -> AccessLevel:
    """Classify the caller for routing (staff vs. guest)."""
    return classify_session(token)


def require_action(action: MailAction):
    """Build a dependency that lets a route run only if the permission matrix allows it.

    Anonymous callers refused an action get 401. Signed-in staff refused an
    action (the guest lookup) are sent to the staff list with a 303.

    Usage:
        @router.post("/mail", dependencies=[Depends(require_action(MailAction.CREATE))])
    """
    def check_action(level: AccessLevel = Depends(get_access_level)) -> AccessLevel:
        if is_permitted(level, action):
            return level
        if level == AccessLevel.AUTHENTICATED:
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                headers={"Location": STAFF_HOME},
            )
        raise _UNAUTHORIZED

    return check_action


async def get_current_staff(
    token: Optional[str] = Depends(get_session_token),
    db: AsyncSession = Depends(get_db),
) -> StaffUser:
    """Validate the session token and return the signed-in staff user.

    Raises:
        HTTPException 401: If the caller is not an authenticated staff member
        HTTPException 403: If the staff account is disabled
    """
    if classify_session(token) != AccessLevel.AUTHENTICATED:
        raise _UNAUTHORIZED

    try:
        user_id = UUID(decode_token(token)["sub"])
    except (jwt.InvalidTokenError, ValueError):
        raise _UNAUTHORIZED

    user = (await db.execute(select(StaffUser).where(StaffUser.id == user_id))).scalar_one_or_none()
    if not user:
        raise _UNAUTHORIZED

    if user.status != "ACTIVE":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff account is disabled",
        )

    return user


def get_token_claims(token: Optional[str] = Depends(get_session_token)) -> dict:
    """Decoded claims of a valid, unrevoked session token (used by logout)."""
    if not token:
        raise _UNAUTHORIZED
    try:
        claims = decode_token(token)
    except jwt.InvalidTokenError:
        raise _UNAUTHORIZED
    if revoked_tokens.is_revoked(claims.get("jti")):
        raise _UNAUTHORIZED
    return claims


# Type alias for dependency injection
CurrentStaff = Annotated[StaffUser, Depends(get_current_staff)]
