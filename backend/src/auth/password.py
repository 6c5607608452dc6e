"""Staff password hashing with Argon2id

Passwords are combined with a server-side PASSWORD_PEPPER before hashing.
Argon2id parameters follow the OWASP recommendation (64 MB memory, 3
iterations, 4 lanes).
"""

import os
import re
from argon2 import PasswordHasher, Type
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError


_hasher = PasswordHasher(
    memory_cost=65536,  # 64 MB
    time_cost=3,
    parallelism=4,
    hash_len=32,
    salt_len=16,
    type=Type.ID
)

MIN_PASSWORD_LENGTH = 10


def _get_pepper() -> str:
    pepper = os.getenv('PASSWORD_PEPPER')
    if not pepper:
        raise ValueError("PASSWORD_PEPPER environment variable is not set")
    return pepper


def hash_password(password: str) -> str:
    """Hash a staff password.

    Raises:
        ValueError: If PASSWORD_PEPPER is not set or password is empty
    """
    if not password:
        raise ValueError("Password cannot be empty")
    return _hasher.hash(password + _get_pepper())


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Never raises on mismatch."""
    if not password or not password_hash:
        return False

    try:
        return _hasher.verify(password_hash, password + _get_pepper())
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def validate_password_strength(password: str) -> tuple[bool, str]:
    """Check a new staff password before it is stored.

    Requires MIN_PASSWORD_LENGTH characters with at least one letter and one
    digit. Desk terminals are shared, so length matters more than symbols.

    Example:
        >>> validate_password_strength("short1")
        (False, 'Password must be at least 10 characters long')
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"

    if not re.search(r'[A-Za-z]', password):
        return False, "Password must contain at least one letter"

    if not re.search(r'\d', password):
        return False, "Password must contain at least one digit"

    return True, ""
