"""Record Store Port - Domain interface for mail record persistence.

This port defines the contract the mail lifecycle and query engine rely on.
Adapters provide SQL (PostgreSQL/SQLite) or in-memory storage.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional
from uuid import UUID

from ..models import MailRecord, MailRecordDraft


class MailRecordStorePort(ABC):
    """Port interface for mail record storage.

    Key Design Principles:
    - Every call is async and suspends until the backend answers
    - Ordering (created_at descending) is applied by the store, not by callers
    - Exact-equality filtering (guest lookup) is pushed down to the store
    - Concurrent writers are arbitrated by the backend (last writer wins)
    - Any backend failure, including an authorization denial, raises StoreError

    Example Usage:
        store = SqlAlchemyMailRecordStore(session)

        records = await store.list()
        mine = await store.find_exact("210", "KB")
    """

    @abstractmethod
    async def list(self) -> List[MailRecord]:
        """Return all mail records, most recent first.

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def find_exact(self, room_number: str, initials: str) -> List[MailRecord]:
        """Return records whose room_number and initials equal the arguments.

        Arguments are expected to be normalized already. Most recent first.

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def get(self, mail_id: UUID) -> Optional[MailRecord]:
        """Return a single record, or None if it does not exist.

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def insert(self, draft: MailRecordDraft) -> MailRecord:
        """Persist a new record and return it with its assigned id.

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def update(self, mail_id: UUID, fields: Mapping[str, Any]) -> MailRecord:
        """Overwrite the given fields of a record and return the result.

        Field names are MailRecord attribute names (room_number, initials,
        kind, status, created_at).

        Raises:
            NotFoundError: If no record has this id
            StoreError: If the backend fails
        """
        pass
