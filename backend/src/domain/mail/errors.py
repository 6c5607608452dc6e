"""Error taxonomy for mail operations.

All errors are recoverable at the call site: the operation reports failure
without touching state the caller already holds.
"""

# Single message for every store failure, so authorization denials from the
# store cannot be told apart from outages.
STORE_FAILURE_MESSAGE = "Mail records are unavailable right now. Please try again."


class MailError(Exception):
    """Base exception for mail domain errors."""
    pass


class ValidationError(MailError):
    """Malformed input, e.g. a required field is empty after normalization."""
    pass


class NotFoundError(MailError):
    """Mutation target does not exist."""

    def __init__(self, mail_id):
        self.mail_id = mail_id
        super().__init__(f"Mail item {mail_id} not found")


class StoreError(MailError):
    """Record store failure (transport, timeout, authorization denial)."""

    def __init__(self, message: str = STORE_FAILURE_MESSAGE):
        super().__init__(message)
