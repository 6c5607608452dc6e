"""JWT session tokens for front-desk staff

A staff session is a signed JWT. Holding a valid, unexpired and unrevoked
token is what makes a caller "authenticated"; every other caller is an
anonymous guest.

Token Claims:
=============

- sub: Staff user ID as UUID string
- email: Staff email address (display, logging)
- role: Always "STAFF" (there is a single staff role)
- jti: Unique token ID, used to revoke the token on sign-out
- iat: Issued-at Unix timestamp
- exp: Expiry Unix timestamp (iat + JWT_EXPIRY_MINUTES)

Security Properties:
- Algorithm: HS256 (HMAC-SHA256 symmetric signing)
- Secret: JWT_SECRET environment variable
- Stateless validation; sign-out is handled by the revocation list
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Dict, Any
from uuid import UUID, uuid4
import jwt

STAFF_ROLE = "STAFF"


def _get_jwt_secret() -> str:
    """Get JWT_SECRET from environment.

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    secret = os.getenv('JWT_SECRET')
    if not secret:
        raise ValueError("JWT_SECRET environment variable is not set")
    return secret


def _get_jwt_expiry_minutes() -> int:
    """Get JWT_EXPIRY_MINUTES from environment (default: 480, one desk shift)."""
    expiry = os.getenv('JWT_EXPIRY_MINUTES', '480')
    try:
        return int(expiry)
    except ValueError:
        return 480


def create_access_token(user_id: UUID, email: str) -> str:
    """Create a session token for a signed-in staff member.

    Args:
        user_id: Staff user's UUID
        email: Staff user's email address

    Returns:
        str: Signed JWT token

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    secret = _get_jwt_secret()
    now = datetime.now(timezone.utc)
    expiration = now + timedelta(minutes=_get_jwt_expiry_minutes())

    payload = {
        'sub': str(user_id),
        'email': email,
        'role': STAFF_ROLE,
        'jti': uuid4().hex,
        'iat': int(now.timestamp()),
        'exp': int(expiration.timestamp()),
    }

    return jwt.encode(payload, secret, algorithm='HS256')


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a session token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, tampered, or not a staff token
        ValueError: If JWT_SECRET is not set
    """
    secret = _get_jwt_secret()

    payload = jwt.decode(
        token,
        secret,
        algorithms=['HS256'],
        options={"require": ["sub", "jti", "exp", "iat"]},
    )
    if payload.get('role') != STAFF_ROLE:
        raise jwt.InvalidTokenError("Invalid token: not a staff session")
    return payload
