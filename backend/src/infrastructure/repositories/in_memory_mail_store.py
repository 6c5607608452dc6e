"""
In-memory mail record store for testing and development

Implements the record store port without a database. Supports simulated
latency and failures so callers' stale-response and error handling can be
exercised.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import UUID, uuid4

from domain.mail.errors import NotFoundError, StoreError
from domain.mail.models import MailRecord, MailRecordDraft
from domain.mail.ports import MailRecordStorePort

logger = logging.getLogger(__name__)


class InMemoryMailRecordStore(MailRecordStorePort):
    """
    Mail record store kept in a dict.

    Configuration:
        - mode: "success" | "failure" (default: "success")
        - simulate_delay_ms: Delay applied to every call (default: 0)

    Usage:
        store = InMemoryMailRecordStore()
        record = await store.insert(draft)

        store.mode = "failure"
        await store.list()  # Raises StoreError
    """

    def __init__(self, records: Optional[Iterable[MailRecord]] = None, simulate_delay_ms: int = 0):
        self._records: Dict[UUID, MailRecord] = {r.id: r for r in records or []}
        self.mode = "success"
        self.simulate_delay_ms = simulate_delay_ms
        self.calls: List[str] = []

    async def _call(self, operation: str) -> None:
        self.calls.append(operation)
        delay_ms = self.simulate_delay_ms
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000.0)
        if self.mode == "failure":
            logger.info(f"InMemoryMailRecordStore: Simulating {operation} failure")
            raise StoreError()

    def _ordered(self, records: Iterable[MailRecord]) -> List[MailRecord]:
        return sorted(records, key=lambda r: (r.created_at, str(r.id)), reverse=True)

    async def list(self) -> List[MailRecord]:
        await self._call("list")
        return self._ordered(self._records.values())

    async def find_exact(self, room_number: str, initials: str) -> List[MailRecord]:
        await self._call("find_exact")
        return self._ordered(
            r for r in self._records.values()
            if r.room_number == room_number and r.initials == initials
        )

    async def get(self, mail_id: UUID) -> Optional[MailRecord]:
        await self._call("get")
        return self._records.get(mail_id)

    async def insert(self, draft: MailRecordDraft) -> MailRecord:
        await self._call("insert")
        record = MailRecord(
            id=uuid4(),
            room_number=draft.room_number,
            initials=draft.initials,
            kind=draft.kind,
            status=draft.status,
            created_at=draft.created_at,
        )
        self._records[record.id] = record
        return record

    async def update(self, mail_id: UUID, fields: Mapping[str, Any]) -> MailRecord:
        await self._call("update")
        current = self._records.get(mail_id)
        if current is None:
            raise NotFoundError(mail_id)
        updated = replace(current, **fields)
        self._records[mail_id] = updated
        return updated
