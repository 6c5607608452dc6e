"""SQLAlchemy Models for PostDesk"""

from .base import Base
from .mail_item import MailItem
from .staff_user import StaffUser

__all__ = [
    "Base",
    "MailItem",
    "StaffUser",
]
