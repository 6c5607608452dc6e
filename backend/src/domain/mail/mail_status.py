"""MailStatus state machine for the mail item lifecycle

State flow:
    (new) → PENDING → RECEIVED

Only the automatic transitions are listed here. The staff edit operation
overwrites status directly and is not bound by this table.
"""

from enum import Enum
from typing import Optional, Dict, List


class MailStatus(str, Enum):
    """Pickup status of a mail item

    Values are stored as TEXT in the database and must match exactly.
    """
    PENDING = "pending"    # Logged at the desk, waiting for the guest
    RECEIVED = "received"  # Handed over to the guest


class MailKind(str, Enum):
    """What was delivered. UNSPECIFIED is stored as NULL."""
    LETTER = "letter"
    PACKAGE = "package"
    UNSPECIFIED = "unspecified"


# Automatic transitions (create, mark received)
ALLOWED_TRANSITIONS: Dict[Optional[MailStatus], List[MailStatus]] = {
    None: [MailStatus.PENDING],
    MailStatus.PENDING: [MailStatus.RECEIVED],
    MailStatus.RECEIVED: [],  # Only an explicit edit can move it back
}


def can_transition(from_status: Optional[MailStatus], to_status: MailStatus) -> bool:
    """Validate if an automatic status transition is allowed

    Args:
        from_status: Current status (None for new mail items)
        to_status: Target status

    Returns:
        True if transition is allowed, False otherwise

    Example:
        >>> can_transition(MailStatus.PENDING, MailStatus.RECEIVED)
        True
        >>> can_transition(MailStatus.RECEIVED, MailStatus.PENDING)
        False
    """
    allowed = ALLOWED_TRANSITIONS.get(from_status, [])
    return to_status in allowed
