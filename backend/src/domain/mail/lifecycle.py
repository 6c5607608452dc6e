"""Mail item lifecycle: create, mark received, edit.

The service is stateless besides the record store. Callers holding a result
set must re-query after every successful mutation.
"""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, Mapping, Optional
from uuid import UUID

from .errors import NotFoundError, ValidationError
from .mail_status import MailKind, MailStatus, can_transition
from .models import MailRecord, MailRecordDraft, ensure_utc, require_identifier
from .ports import MailRecordStorePort

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("room_number", "initials", "kind", "status", "created_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_kind(value: Any) -> MailKind:
    if value is None or value == "":
        return MailKind.UNSPECIFIED
    try:
        return MailKind(value)
    except ValueError:
        raise ValidationError(f"Unknown mail kind: {value}")


def _coerce_status(value: Any) -> MailStatus:
    try:
        return MailStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown mail status: {value}")


class MailLifecycleService:
    """Staff-facing mutations of mail records.

    Example:
        lifecycle = MailLifecycleService(store)
        record = await lifecycle.create("210", "kb")
        await lifecycle.mark_received(record.id)
    """

    def __init__(
        self,
        store: MailRecordStorePort,
        clock: Optional[Callable[[], datetime]] = None,
        display_tz: tzinfo = timezone.utc,
    ):
        self.store = store
        self.clock = clock or _utcnow
        # Timestamps typed at the desk without an offset are desk-local
        self.display_tz = display_tz

    async def create(self, room_number: str, initials: str, kind: Any = MailKind.UNSPECIFIED) -> MailRecord:
        """Log a new mail item as PENDING.

        Raises:
            ValidationError: If room_number or initials is empty after normalization
            StoreError: If the store fails
        """
        draft = MailRecordDraft(
            room_number=require_identifier(room_number, "Room number"),
            initials=require_identifier(initials, "Initials"),
            kind=_coerce_kind(kind),
            status=MailStatus.PENDING,
            created_at=ensure_utc(self.clock()),
        )
        record = await self.store.insert(draft)
        logger.info(f"Mail item {record.id} logged")
        return record

    async def mark_received(self, mail_id: UUID) -> MailRecord:
        """Move a PENDING item to RECEIVED.

        Idempotent: an item that is already RECEIVED is returned unchanged.

        Raises:
            NotFoundError: If mail_id does not resolve
            StoreError: If the store fails
        """
        record = await self.store.get(mail_id)
        if record is None:
            raise NotFoundError(mail_id)

        if not can_transition(record.status, MailStatus.RECEIVED):
            logger.info(f"Mail item {mail_id} already received, nothing to do")
            return record

        updated = await self.store.update(mail_id, {"status": MailStatus.RECEIVED})
        logger.info(f"Mail item {mail_id} marked received")
        return updated

    async def edit(self, mail_id: UUID, changes: Mapping[str, Any]) -> MailRecord:
        """Overwrite any subset of the editable fields of a mail item.

        This is the only path that can move an item back to PENDING or change
        its timestamp. room_number and initials are re-normalized. A created_at
        without an offset is read in the display time zone.

        Raises:
            ValidationError: If a field is unknown or a value is invalid
            NotFoundError: If mail_id does not resolve
            StoreError: If the store fails
        """
        fields = self._validate_changes(changes)

        record = await self.store.get(mail_id)
        if record is None:
            raise NotFoundError(mail_id)

        if not fields:
            return record

        updated = await self.store.update(mail_id, fields)
        logger.info(f"Mail item {mail_id} edited: {sorted(fields)}")
        return updated

    def _validate_changes(self, changes: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        fields: Dict[str, Any] = {}
        if "room_number" in changes:
            fields["room_number"] = require_identifier(changes["room_number"], "Room number")
        if "initials" in changes:
            fields["initials"] = require_identifier(changes["initials"], "Initials")
        if "kind" in changes:
            fields["kind"] = _coerce_kind(changes["kind"])
        if "status" in changes:
            fields["status"] = _coerce_status(changes["status"])
        if "created_at" in changes:
            created_at = changes["created_at"]
            if not isinstance(created_at, datetime):
                raise ValidationError("Date must be a timestamp")
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=self.display_tz)
            fields["created_at"] = ensure_utc(created_at)
        return fields
