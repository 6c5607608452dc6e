"""SQLAlchemy adapter for the mail record store port.

Works on an AsyncSession (asyncpg in production, aiosqlite in tests). When
role enforcement is on and the backend is PostgreSQL, every transaction runs
under a dedicated database role so the row-level security policies from the
migrations decide what the caller may read or write.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import logging
import re
import uuid
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.mail_item import MailItem
from domain.mail.errors import NotFoundError, StoreError
from domain.mail.mail_status import MailKind, MailStatus
from domain.mail.models import MailRecord, MailRecordDraft
from domain.mail.ports import MailRecordStorePort
from observability.metrics import store_failures_total

logger = logging.getLogger(__name__)

_ROLE_NAME = re.compile(r'^[a-z_][a-z0-9_]*$')


def _to_record(item: MailItem) -> MailRecord:
    return MailRecord(
        id=item.id,
        room_number=item.room_number,
        initials=item.initials,
        kind=MailKind(item.kind) if item.kind else MailKind.UNSPECIFIED,
        status=MailStatus(item.status),
        created_at=item.created_at,
    )


def _to_columns(fields: Mapping[str, Any]) -> Dict[str, Any]:
    values = dict(fields)
    if "kind" in values:
        kind = MailKind(values["kind"])
        values["kind"] = None if kind == MailKind.UNSPECIFIED else kind.value
    if "status" in values:
        values["status"] = MailStatus(values["status"]).value
    return values


class SqlAlchemyMailRecordStore(MailRecordStorePort):
    """Mail record store backed by the mail_item table.

    Args:
        session: Async database session
        db_role: Database role to assume per transaction (PostgreSQL only)
    """

    def __init__(self, session: AsyncSession, db_role: Optional[str] = None):
        if db_role is not None and not _ROLE_NAME.match(db_role):
            raise ValueError(f"Invalid database role name: {db_role}")
        self.session = session
        self.db_role = db_role

    async def _apply_role(self) -> None:
        if self.db_role and self.session.bind.dialect.name == "postgresql":
            await self.session.execute(text(f"SET LOCAL ROLE {self.db_role}"))

    async def _fail(self, operation: str, exc: Exception) -> None:
        logger.error(f"Mail store {operation} failed", exc_info=exc, extra={"operation": operation})
        store_failures_total.labels(operation=operation).inc()
        try:
            await self.session.rollback()
        except (SQLAlchemyError, OSError):
            logger.warning("Rollback after store failure also failed", exc_info=True)
        raise StoreError() from exc

    async def list(self) -> List[MailRecord]:
        stmt = select(MailItem).order_by(MailItem.created_at.desc(), MailItem.id.desc())
        try:
            await self._apply_role()
            items = (await self.session.execute(stmt)).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            await self._fail("list", e)
        return [_to_record(item) for item in items]

    async def find_exact(self, room_number: str, initials: str) -> List[MailRecord]:
        stmt = (
            select(MailItem)
            .where(MailItem.room_number == room_number, MailItem.initials == initials)
            .order_by(MailItem.created_at.desc(), MailItem.id.desc())
        )
        try:
            await self._apply_role()
            items = (await self.session.execute(stmt)).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            await self._fail("find_exact", e)
        return [_to_record(item) for item in items]

    async def get(self, mail_id: UUID) -> Optional[MailRecord]:
        stmt = select(MailItem).where(MailItem.id == mail_id).execution_options(populate_existing=True)
        try:
            await self._apply_role()
            item = (await self.session.execute(stmt)).scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            await self._fail("get", e)
        return _to_record(item) if item is not None else None

    async def insert(self, draft: MailRecordDraft) -> MailRecord:
        item = MailItem(**_to_columns({
            "id": uuid.uuid4(),
            "room_number": draft.room_number,
            "initials": draft.initials,
            "kind": draft.kind,
            "status": draft.status,
            "created_at": draft.created_at,
        }))
        try:
            await self._apply_role()
            self.session.add(item)
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            await self._fail("insert", e)
        return MailRecord(
            id=item.id,
            room_number=draft.room_number,
            initials=draft.initials,
            kind=draft.kind,
            status=draft.status,
            created_at=draft.created_at,
        )

    async def update(self, mail_id: UUID, fields: Mapping[str, Any]) -> MailRecord:
        stmt = (
            update(MailItem)
            .where(MailItem.id == mail_id)
            .values(**_to_columns(fields))
            .execution_options(synchronize_session=False)
        )
        try:
            await self._apply_role()
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                await self.session.rollback()
                raise NotFoundError(mail_id)
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            await self._fail("update", e)

        record = await self.get(mail_id)
        if record is None:
            raise NotFoundError(mail_id)
        return record
