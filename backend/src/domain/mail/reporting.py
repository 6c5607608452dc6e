"""Printable listing snapshot and guest-facing labels.

Builds data only; page layout belongs to the front end.
"""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable, List

from .mail_status import MailKind, MailStatus
from .models import MailRecord

DATE_FORMAT = "%d-%m-%Y"

STATUS_LABELS = {
    MailStatus.PENDING: "Ready for pickup",
    MailStatus.RECEIVED: "Picked up",
}

KIND_LABELS = {
    MailKind.LETTER: "Letter",
    MailKind.PACKAGE: "Package",
    MailKind.UNSPECIFIED: "Mail",
}


@dataclass(frozen=True)
class PrintRow:
    room_number: str
    initials: str
    date: str


@dataclass(frozen=True)
class PrintListing:
    title: str
    printed_on: str
    rows: List[PrintRow] = field(default_factory=list)


def guest_status_label(status: MailStatus) -> str:
    return STATUS_LABELS[MailStatus(status)]


def kind_label(kind: MailKind) -> str:
    return KIND_LABELS[MailKind(kind)]


def build_print_listing(
    records: Iterable[MailRecord],
    display_tz: tzinfo,
    title: str,
    printed_at: datetime,
) -> PrintListing:
    """Reduce the currently filtered result set to printable rows.

    Rows keep the order of records; nothing is re-sorted here.
    """
    rows = [
        PrintRow(
            room_number=record.room_number,
            initials=record.initials,
            date=record.created_at.astimezone(display_tz).strftime(DATE_FORMAT),
        )
        for record in records
    ]
    return PrintListing(
        title=title,
        printed_on=printed_at.astimezone(display_tz).strftime(DATE_FORMAT),
        rows=rows,
    )
