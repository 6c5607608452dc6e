"""Request ID management for request correlation.

The current request ID lives in a ContextVar so it follows the request
through awaits without being passed around.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Incoming IDs longer than this are replaced rather than echoed back
MAX_REQUEST_ID_LENGTH = 128


def generate_request_id() -> str:
    """Generate a new unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def accept_request_id(candidate: Optional[str]) -> str:
    """Use the caller's X-Request-ID when it is sane, otherwise mint one."""
    if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH and candidate.isprintable():
        return candidate
    return generate_request_id()
