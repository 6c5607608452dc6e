"""Record store adapters - Concrete implementations of MailRecordStorePort."""

from .mail_record_repository import SqlAlchemyMailRecordStore
from .in_memory_mail_store import InMemoryMailRecordStore

__all__ = [
    "SqlAlchemyMailRecordStore",
    "InMemoryMailRecordStore",
]
