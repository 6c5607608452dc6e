"""Database session factory and configuration.

Provides async database connectivity and session management for the PostDesk
backend.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from config import get_settings
from models import Base

DATABASE_URL = get_settings().DATABASE_URL

_engine_kwargs = {
    "echo": False,  # Set to True for SQL query logging
}

# SQLite connections are opened per use; pool settings only apply to PostgreSQL
if DATABASE_URL.startswith("sqlite"):
    _engine_kwargs["poolclass"] = NullPool
else:
    _engine_kwargs["pool_pre_ping"] = True  # Verify connections before using
    _engine_kwargs["pool_size"] = 5
    _engine_kwargs["max_overflow"] = 10

engine = create_async_engine(DATABASE_URL, **_engine_kwargs)

# Create session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI endpoints.

    Usage:
        @app.get("/mail")
        async def list_mail(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with SessionLocal() as db:
        yield db


async def create_all_tables() -> None:
    """Create tables directly from the models (development and tests).

    Production schemas are managed by the Alembic migrations.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
