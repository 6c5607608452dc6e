"""MailItem SQLAlchemy model

MailItem is one piece of mail or one package held at the front desk for a
guest, identified by room number and initials.
"""

import uuid

from sqlalchemy import Column, Text, CheckConstraint, Index, Uuid
from sqlalchemy.sql import func

from .base import Base, UTCDateTime


class MailItem(Base):
    """Mail item awaiting (or past) pickup.

    room_number and initials are stored trimmed and uppercased by the
    lifecycle service. kind is NULL when staff did not specify it.
    """
    __tablename__ = "mail_item"
    __table_args__ = (
        CheckConstraint("kind IN ('letter', 'package')", name="ck_mail_item_kind"),
        CheckConstraint("status IN ('pending', 'received')", name="ck_mail_item_status"),
        Index("ix_mail_item_created_at", "created_at"),
        Index("ix_mail_item_room_initials", "room_number", "initials"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    room_number = Column(Text, nullable=False)
    initials = Column(Text, nullable=False)
    kind = Column(Text, nullable=True)
    status = Column(Text, nullable=False, server_default="pending")
    created_at = Column(UTCDateTime(), nullable=False, server_default=func.now())
