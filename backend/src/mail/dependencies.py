"""FastAPI dependencies wiring the mail domain to the database."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import get_access_level
from auth.gate import AccessLevel
from config import get_settings
from database import get_db
from domain.mail import MailLifecycleService, MailQueryEngine
from domain.mail.ports import MailRecordStorePort
from infrastructure.repositories import SqlAlchemyMailRecordStore


def get_record_store(
    db: AsyncSession = Depends(get_db),
    level: AccessLevel = Depends(get_access_level),
) -> MailRecordStorePort:
    """Record store for the current caller.

    With DB_ENFORCE_ROLES on, guests and staff run under separate database
    roles and the row-level security policies decide what each may touch.
    """
    settings = get_settings()
    db_role = None
    if settings.DB_ENFORCE_ROLES:
        db_role = settings.DB_STAFF_ROLE if level == AccessLevel.AUTHENTICATED else settings.DB_GUEST_ROLE
    return SqlAlchemyMailRecordStore(db, db_role=db_role)


def get_lifecycle(store: MailRecordStorePort = Depends(get_record_store)) -> MailLifecycleService:
    return MailLifecycleService(store, display_tz=get_settings().display_tz)


def get_query_engine(store: MailRecordStorePort = Depends(get_record_store)) -> MailQueryEngine:
    return MailQueryEngine(store, get_settings().display_tz)


Lifecycle = Annotated[MailLifecycleService, Depends(get_lifecycle)]
QueryEngine = Annotated[MailQueryEngine, Depends(get_query_engine)]
