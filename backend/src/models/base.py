"""Base SQLAlchemy declarative base for all models"""

from datetime import timezone

from sqlalchemy import TypeDecorator, DateTime
from sqlalchemy.orm import declarative_base


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp that works with both PostgreSQL and SQLite.

    Values are converted to UTC on the way in. SQLite drops tzinfo, so naive
    values read back are tagged as UTC, which keeps ordering and date
    comparisons identical on both backends.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        if dialect.name == 'sqlite':
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


Base = declarative_base()
