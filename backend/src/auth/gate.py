"""Access gate: staff session vs. anonymous guest.

Permission Matrix:
┌────────────────────────┬───────────────┬───────────┐
│ Action                 │ AUTHENTICATED │ ANONYMOUS │
├────────────────────────┼───────────────┼───────────┤
│ Browse / filter mail   │       ✓       │           │
│ Log new mail           │       ✓       │           │
│ Mark mail received     │       ✓       │           │
│ Edit mail              │       ✓       │           │
│ Print mail list        │       ✓       │           │
│ Guest lookup           │  (redirected) │     ✓     │
└────────────────────────┴───────────────┴───────────┘

The gate only routes callers. The record store's row-level security policies
are what actually stop a guest from writing; see the migrations.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Set

import jwt

from .jwt import decode_token
from .revocation import TokenRevocationList, revoked_tokens

logger = logging.getLogger(__name__)

# Where signed-in staff are sent when they reach a guest-only page
STAFF_HOME = "/api/v1/mail"


class AccessLevel(str, Enum):
    """Who is calling, as far as the gate can tell."""
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class MailAction(str, Enum):
    BROWSE = "browse"
    CREATE = "create"
    MARK_RECEIVED = "mark_received"
    EDIT = "edit"
    PRINT = "print"
    LOOKUP = "lookup"


PERMISSIONS: Dict[AccessLevel, Set[MailAction]] = {
    AccessLevel.AUTHENTICATED: {
        MailAction.BROWSE,
        MailAction.CREATE,
        MailAction.MARK_RECEIVED,
        MailAction.EDIT,
        MailAction.PRINT,
    },
    AccessLevel.ANONYMOUS: {MailAction.LOOKUP},
}


def classify_session(
    token: Optional[str],
    revocations: TokenRevocationList = revoked_tokens,
) -> AccessLevel:
    """Classify a bearer token.

    Missing, malformed, expired and revoked tokens all classify as ANONYMOUS;
    the caller is then treated as a guest rather than rejected.

    Example:
        >>> classify_session(None)
        <AccessLevel.ANONYMOUS: 'anonymous'>
    """
    if not token:
        return AccessLevel.ANONYMOUS

    try:
        payload = decode_token(token)
    except jwt.InvalidTokenError as e:
        logger.debug(f"Treating caller as anonymous: {e}")
        return AccessLevel.ANONYMOUS

    if revocations.is_revoked(payload.get("jti")):
        logger.debug("Treating caller as anonymous: token revoked")
        return AccessLevel.ANONYMOUS

    return AccessLevel.AUTHENTICATED


def is_permitted(level: AccessLevel, action: MailAction) -> bool:
    """Check whether an access level may perform an action.

    Examples:
        >>> is_permitted(AccessLevel.ANONYMOUS, MailAction.LOOKUP)
        True
        >>> is_permitted(AccessLevel.ANONYMOUS, MailAction.EDIT)
        False
        >>> is_permitted(AccessLevel.AUTHENTICATED, MailAction.LOOKUP)
        False
    """
    return action in PERMISSIONS.get(level, set())
