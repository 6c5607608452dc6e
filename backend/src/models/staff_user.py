"""StaffUser SQLAlchemy model"""

import re
import uuid

from sqlalchemy import Column, Text, CheckConstraint, UniqueConstraint, Uuid
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from .base import Base, UTCDateTime


class StaffUser(Base):
    """Front-desk staff account.

    Staff sign in to log, browse and update mail items. Passwords are hashed
    using Argon2id.
    """
    __tablename__ = "staff_user"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    password_hash = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default="ACTIVE")
    last_login_at = Column(UTCDateTime(), nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, server_default=func.now())
    updated_at = Column(UTCDateTime(), nullable=False, server_default=func.now(), onupdate=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "status IN ('ACTIVE', 'DISABLED')",
            name='ck_staff_user_status'
        ),
        UniqueConstraint('email', name='uq_staff_user_email')
    )

    @validates('email')
    def validate_email(self, key, value):
        """Basic email format validation"""
        if not re.match(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$', value):
            raise ValueError("Invalid email format")
        return value.lower()
