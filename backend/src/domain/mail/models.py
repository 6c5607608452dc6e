"""Mail domain models and normalization rules"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID

from .errors import ValidationError
from .mail_status import MailKind, MailStatus


class StatusFilter(str, Enum):
    """Status predicate for the staff browse"""
    ALL = "all"
    PENDING = "pending"
    RECEIVED = "received"


@dataclass(frozen=True)
class MailRecord:
    """A logged mail item as returned by the record store.

    room_number and initials are always normalized (see normalize_identifier).
    created_at is timezone-aware.
    """
    id: UUID
    room_number: str
    initials: str
    kind: MailKind
    status: MailStatus
    created_at: datetime


@dataclass(frozen=True)
class MailRecordDraft:
    """A mail item that has not been stored yet (no id)."""
    room_number: str
    initials: str
    kind: MailKind
    status: MailStatus
    created_at: datetime


@dataclass(frozen=True)
class StaffFilter:
    """Criteria for the staff browse. Defaults match everything."""
    search_term: str = ""
    status: StatusFilter = StatusFilter.ALL
    date: Optional[date] = None

    @property
    def is_default(self) -> bool:
        return not self.search_term.strip() and self.status == StatusFilter.ALL and self.date is None

    @classmethod
    def from_params(cls, search_term: str = "", status: str = "all", date_value: str = "") -> "StaffFilter":
        """Build criteria from raw request parameters.

        Empty strings mean "no filter", as they do in the staff form.

        Raises:
            ValidationError: If status or date cannot be parsed
        """
        try:
            status_filter = StatusFilter(status or StatusFilter.ALL.value)
        except ValueError:
            raise ValidationError(f"Unknown status filter: {status}")

        parsed_date = None
        if date_value:
            try:
                parsed_date = date.fromisoformat(date_value)
            except ValueError:
                raise ValidationError(f"Invalid date filter (expected YYYY-MM-DD): {date_value}")

        return cls(search_term=search_term or "", status=status_filter, date=parsed_date)


def normalize_identifier(value: Optional[str]) -> str:
    """Trim whitespace and uppercase a room number or initials.

    Example:
        >>> normalize_identifier("  kb ")
        'KB'
    """
    if value is None:
        return ""
    return value.strip().upper()


def require_identifier(value: Optional[str], field_name: str) -> str:
    """Normalize a required identifier, rejecting empty results.

    Raises:
        ValidationError: If the value is empty after normalization
    """
    normalized = normalize_identifier(value)
    if not normalized:
        raise ValidationError(f"{field_name} is required")
    return normalized


def ensure_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
