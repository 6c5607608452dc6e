#!/usr/bin/env python
"""Seed script to create a front-desk staff account.

Run once during setup for each desk login. There is no self-registration.

Usage:
    python backend/scripts/seed_staff.py

Environment Variables:
    DATABASE_URL: Async SQLAlchemy URL (see config.py)
    PASSWORD_PEPPER: Password hashing pepper (required)
    STAFF_EMAIL: Email for the staff account (required)
    STAFF_PASSWORD: Password for the staff account (required)
    STAFF_NAME: Display name (default: Front Desk)
"""

import asyncio
import os
import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from auth.password import hash_password, validate_password_strength
from database import SessionLocal
from models.staff_user import StaffUser


async def create_staff(email: str, password: str, name: str) -> int:
    async with SessionLocal() as session:
        existing = (
            await session.execute(select(StaffUser).where(StaffUser.email == email.lower()))
        ).scalar_one_or_none()
        if existing:
            print(f"ERROR: Staff account {email} already exists")
            return 1

        staff = StaffUser(
            email=email,
            name=name,
            password_hash=hash_password(password),
            status="ACTIVE",
        )
        session.add(staff)
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            print(f"ERROR: Failed to create staff account: {e}")
            return 1

        print("SUCCESS: Staff account created")
        print(f"  ID:    {staff.id}")
        print(f"  Email: {staff.email}")
        print(f"  Name:  {staff.name}")
        return 0


def main():
    email = os.getenv("STAFF_EMAIL")
    password = os.getenv("STAFF_PASSWORD")
    name = os.getenv("STAFF_NAME", "Front Desk")

    if not email or not password:
        print("ERROR: STAFF_EMAIL and STAFF_PASSWORD environment variables are required")
        sys.exit(1)

    is_valid, error_msg = validate_password_strength(password)
    if not is_valid:
        print(f"ERROR: Password does not meet strength requirements: {error_msg}")
        sys.exit(1)

    sys.exit(asyncio.run(create_staff(email, password, name)))


if __name__ == "__main__":
    main()
