"""Mail domain module - mail item lifecycle, staff/guest queries, reporting"""

from .errors import MailError, NotFoundError, StoreError, ValidationError, STORE_FAILURE_MESSAGE
from .mail_status import MailKind, MailStatus, can_transition, ALLOWED_TRANSITIONS
from .models import (
    MailRecord,
    MailRecordDraft,
    StaffFilter,
    StatusFilter,
    normalize_identifier,
)
from .lifecycle import MailLifecycleService
from .queries import MailQueryEngine
from .reporting import PrintListing, PrintRow, build_print_listing, guest_status_label, kind_label
from .views import GuestMailLookup, Notice, StaffMailBoard

__all__ = [
    "MailError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "STORE_FAILURE_MESSAGE",
    "MailKind",
    "MailStatus",
    "can_transition",
    "ALLOWED_TRANSITIONS",
    "MailRecord",
    "MailRecordDraft",
    "StaffFilter",
    "StatusFilter",
    "normalize_identifier",
    "MailLifecycleService",
    "MailQueryEngine",
    "PrintListing",
    "PrintRow",
    "build_print_listing",
    "guest_status_label",
    "kind_label",
    "GuestMailLookup",
    "Notice",
    "StaffMailBoard",
]
