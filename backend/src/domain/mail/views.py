"""Caller-side state for the staff board and the guest lookup.

Both holders stamp every query with a generation number. Only the response
for the latest generation may replace the displayed records; anything older
is dropped. A failed query leaves the previously displayed records in place
and sets a short notice instead.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import UUID

from .errors import MailError, ValidationError
from .lifecycle import MailLifecycleService
from .mail_status import MailKind
from .models import MailRecord, StaffFilter, normalize_identifier
from .queries import MailQueryEngine
from .reporting import PrintListing, build_print_listing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """Short message for the person at the screen."""
    level: str  # success | error
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(level="success", message=message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(level="error", message=message)


def _failure_notice(fallback: str, exc: MailError) -> Notice:
    # Validation messages are safe to show; everything else gets the generic text
    if isinstance(exc, ValidationError):
        return Notice.error(str(exc))
    return Notice.error(fallback)


class StaffMailBoard:
    """Staff dashboard state: current filter, displayed records, notices.

    Example:
        board = StaffMailBoard(engine, lifecycle)
        await board.refresh(StaffFilter(status=StatusFilter.PENDING))
        await board.mark_received(board.records[0].id)
    """

    def __init__(self, engine: MailQueryEngine, lifecycle: MailLifecycleService, listing_title: str = "Mail List"):
        self.engine = engine
        self.lifecycle = lifecycle
        self.listing_title = listing_title
        self.criteria = StaffFilter()
        self.records: List[MailRecord] = []
        self.loading = False
        self.notice: Optional[Notice] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_active_filters(self) -> bool:
        return not self.criteria.is_default

    def abandon(self) -> None:
        """Drop whatever query is in flight (e.g. the screen was left)."""
        self._generation += 1
        self.loading = False

    async def refresh(self, criteria: Optional[StaffFilter] = None) -> bool:
        """Re-run the browse query. Returns True if the displayed records changed."""
        if criteria is not None:
            self.criteria = criteria
        self._generation += 1
        generation = self._generation
        self.loading = True

        try:
            records = await self.engine.browse(self.criteria)
        except MailError as exc:
            if generation != self._generation:
                return False
            logger.warning(f"Staff browse failed: {exc}")
            self.loading = False
            self.notice = _failure_notice("Failed to load mail items", exc)
            return False

        if generation != self._generation:
            logger.debug(f"Discarding stale browse result (generation {generation} < {self._generation})")
            return False

        self.records = records
        self.loading = False
        return True

    async def clear_filters(self) -> bool:
        return await self.refresh(StaffFilter())

    async def create(self, room_number: str, initials: str, kind: Any = MailKind.UNSPECIFIED) -> Optional[MailRecord]:
        try:
            record = await self.lifecycle.create(room_number, initials, kind)
        except MailError as exc:
            self.notice = _failure_notice("Failed to add mail item", exc)
            return None
        self.notice = Notice.success("Mail item added")
        await self.refresh()
        return record

    async def mark_received(self, mail_id: UUID) -> Optional[MailRecord]:
        try:
            record = await self.lifecycle.mark_received(mail_id)
        except MailError as exc:
            self.notice = _failure_notice("Failed to update mail status", exc)
            return None
        self.notice = Notice.success("Mail item marked as received")
        await self.refresh()
        return record

    async def edit(self, mail_id: UUID, changes: Mapping[str, Any]) -> Optional[MailRecord]:
        try:
            record = await self.lifecycle.edit(mail_id, changes)
        except MailError as exc:
            self.notice = _failure_notice("Failed to update mail item", exc)
            return None
        self.notice = Notice.success("Mail item updated")
        await self.refresh()
        return record

    def print_listing(self, printed_at: Optional[datetime] = None) -> PrintListing:
        """Snapshot of the records currently on screen, in on-screen order."""
        return build_print_listing(
            self.records,
            self.engine.display_tz,
            self.listing_title,
            printed_at or datetime.now(timezone.utc),
        )


class GuestMailLookup:
    """Guest self-service state.

    has_searched tells "nothing asked yet" apart from "asked, nothing found".
    Editing either input resets it and drops any lookup still in flight.
    """

    def __init__(self, engine: MailQueryEngine):
        self.engine = engine
        self.room_number = ""
        self.initials = ""
        self.records: List[MailRecord] = []
        self.has_searched = False
        self.loading = False
        self.notice: Optional[Notice] = None
        self._generation = 0

    @property
    def heading(self) -> str:
        return f"Room {normalize_identifier(self.room_number)} - {normalize_identifier(self.initials)}"

    def set_room_number(self, value: str) -> None:
        self.room_number = value
        self._inputs_changed()

    def set_initials(self, value: str) -> None:
        self.initials = value
        self._inputs_changed()

    def _inputs_changed(self) -> None:
        self.has_searched = False
        self._generation += 1
        self.loading = False

    async def submit(self) -> bool:
        """Run the exact lookup for the current inputs."""
        self._generation += 1
        generation = self._generation
        self.has_searched = True
        self.loading = True

        try:
            records = await self.engine.lookup(self.room_number, self.initials)
        except MailError as exc:
            if generation != self._generation:
                return False
            self.loading = False
            self.notice = _failure_notice("Failed to fetch mail. Please try again.", exc)
            return False

        if generation != self._generation:
            return False

        self.records = records
        self.loading = False
        return True
