"""Query/filter engine for mail records.

Two separate operations on purpose:

- browse(): staff mode, substring search on room number OR initials plus
  status and calendar-date filters, applied after store.list().
- lookup(): guest mode, exact match on room number AND initials, pushed down
  to the store.

Guests must never see another guest's mail because their room number happens
to contain the one typed in, so the guest path never shares the substring
predicate.
"""

import logging
from datetime import tzinfo
from typing import Iterable, List

from .mail_status import MailStatus
from .models import MailRecord, StaffFilter, StatusFilter, normalize_identifier, require_identifier
from .ports import MailRecordStorePort

logger = logging.getLogger(__name__)


def matches_staff_filter(record: MailRecord, criteria: StaffFilter, display_tz: tzinfo) -> bool:
    """Check a single record against the staff criteria (all predicates ANDed)."""
    term = normalize_identifier(criteria.search_term)
    if term and term not in record.room_number and term not in record.initials:
        return False

    if criteria.status != StatusFilter.ALL and record.status != MailStatus(criteria.status.value):
        return False

    if criteria.date is not None:
        if record.created_at.astimezone(display_tz).date() != criteria.date:
            return False

    return True


def apply_staff_filter(
    records: Iterable[MailRecord],
    criteria: StaffFilter,
    display_tz: tzinfo,
) -> List[MailRecord]:
    """Filter records, keeping the order they arrived in."""
    return [r for r in records if matches_staff_filter(r, criteria, display_tz)]


class MailQueryEngine:
    """Read side of the mail domain.

    Args:
        store: Record store adapter
        display_tz: Time zone used to take the date portion of created_at
    """

    def __init__(self, store: MailRecordStorePort, display_tz: tzinfo):
        self.store = store
        self.display_tz = display_tz

    async def browse(self, criteria: StaffFilter) -> List[MailRecord]:
        """Staff composite filter over the full record set.

        Raises:
            StoreError: If the store fails
        """
        records = await self.store.list()
        if criteria.is_default:
            return records

        filtered = apply_staff_filter(records, criteria, self.display_tz)
        logger.debug(f"Staff browse matched {len(filtered)} of {len(records)} mail items")
        return filtered

    async def lookup(self, room_number: str, initials: str) -> List[MailRecord]:
        """Guest exact lookup by room number and initials.

        Raises:
            ValidationError: If either input is empty after normalization
            StoreError: If the store fails
        """
        room = require_identifier(room_number, "Room number")
        guest_initials = require_identifier(initials, "Initials")
        return await self.store.find_exact(room, guest_initials)
