"""Pytest fixtures for PostDesk tests.

Provides reusable test fixtures for:
- A throwaway SQLite database (aiosqlite) with tables created per test
- Staff users (active and disabled)
- Unauthenticated (guest) and staff-authenticated test clients
- In-memory record store and domain services

Usage:
    def test_staff_endpoint(staff_client):
        response = staff_client.get("/api/v1/mail")
        assert response.status_code == 200
"""

import asyncio
import os
import sys
import tempfile
from datetime import timezone
from pathlib import Path

# Set environment variables BEFORE any project imports so settings pick them up
_test_db_dir = tempfile.mkdtemp(prefix="postdesk-tests-")
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(_test_db_dir) / 'postdesk.db'}"
)
os.environ["DB_ENFORCE_ROLES"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["LOG_JSON"] = "false"
os.environ["DISPLAY_TIMEZONE"] = "UTC"

if "PASSWORD_PEPPER" not in os.environ:
    os.environ["PASSWORD_PEPPER"] = "test-pepper-secret-key-32-chars-long"

if "JWT_SECRET" not in os.environ:
    os.environ["JWT_SECRET"] = "test-jwt-secret-key-256-bits-minimum-length-required-for-security"

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from fastapi.testclient import TestClient

from models.base import Base
from models.staff_user import StaffUser
from database import SessionLocal, engine
from auth.password import hash_password
from auth.jwt import create_access_token
from auth.revocation import revoked_tokens
from domain.mail import MailLifecycleService, MailQueryEngine
from infrastructure.repositories import InMemoryMailRecordStore

STAFF_PASSWORD = "FrontDesk2024"


async def _create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _drop_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _add_staff(email: str, name: str, status: str) -> StaffUser:
    async with SessionLocal() as session:
        user = StaffUser(
            email=email,
            name=name,
            password_hash=hash_password(STAFF_PASSWORD),
            status=status,
        )
        session.add(user)
        await session.commit()
        return user


@pytest.fixture(autouse=True)
def reset_revocations():
    """Signed-out tokens must not leak between tests."""
    revoked_tokens.clear()
    yield
    revoked_tokens.clear()


@pytest.fixture(scope="function")
def db_tables():
    """Create all tables before the test and drop them after.

    SQLite connections are not pooled, so nothing opened here is reused by
    the event loop the test client runs the app on.
    """
    asyncio.run(_create_tables())
    yield
    asyncio.run(_drop_tables())


@pytest.fixture(scope="function")
def staff_user(db_tables) -> StaffUser:
    """Create an ACTIVE staff account."""
    return asyncio.run(_add_staff("frontdesk@grandhotel.com", "Front Desk", "ACTIVE"))


@pytest.fixture(scope="function")
def disabled_staff_user(db_tables) -> StaffUser:
    """Create a DISABLED staff account."""
    return asyncio.run(_add_staff("nightshift@grandhotel.com", "Night Shift", "DISABLED"))


@pytest.fixture(scope="function")
def staff_token(staff_user: StaffUser) -> str:
    return create_access_token(user_id=staff_user.id, email=staff_user.email)


@pytest.fixture(scope="function")
def client(db_tables):
    """Unauthenticated test client (a guest)."""
    from main import app

    return TestClient(app, follow_redirects=False)


@pytest.fixture(scope="function")
def staff_client(db_tables, staff_token: str):
    """Test client with a staff Authorization header pre-configured."""
    from main import app

    test_client = TestClient(app, follow_redirects=False)
    test_client.headers.update({"Authorization": f"Bearer {staff_token}"})
    return test_client


@pytest.fixture
def memory_store() -> InMemoryMailRecordStore:
    return InMemoryMailRecordStore()


@pytest.fixture
def lifecycle(memory_store) -> MailLifecycleService:
    return MailLifecycleService(memory_store)


@pytest.fixture
def query_engine(memory_store) -> MailQueryEngine:
    return MailQueryEngine(memory_store, timezone.utc)
