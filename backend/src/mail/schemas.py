"""Pydantic schemas for mail endpoints"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from domain.mail import MailKind, MailRecord, MailStatus, PrintListing, guest_status_label, kind_label


class MailItemCreate(BaseModel):
    """Schema for logging a new mail item.

    room_number and initials are normalized by the lifecycle service; an
    empty value after trimming is rejected there with the same message the
    edit path uses.
    """
    room_number: str = Field(..., max_length=20)
    initials: str = Field(..., max_length=10)
    kind: MailKind = MailKind.UNSPECIFIED

    @field_validator('room_number', 'initials', mode='before')
    @classmethod
    def strip_padding(cls, v):
        """Length limits apply to the trimmed value"""
        return v.strip() if isinstance(v, str) else v

    @field_validator('kind', mode='before')
    @classmethod
    def empty_kind_is_unspecified(cls, v):
        """The staff form sends "" or null when no type was chosen"""
        if v is None or v == "":
            return MailKind.UNSPECIFIED
        return v


class MailItemUpdate(BaseModel):
    """Schema for editing a mail item (partial overwrite).

    Only fields present in the request body are written.
    """
    room_number: Optional[str] = Field(None, max_length=20)
    initials: Optional[str] = Field(None, max_length=10)
    kind: Optional[MailKind] = None
    status: Optional[MailStatus] = None
    created_at: Optional[datetime] = None

    @field_validator('room_number', 'initials', mode='before')
    @classmethod
    def strip_padding(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('kind', mode='before')
    @classmethod
    def empty_kind_is_unspecified(cls, v):
        if v is None or v == "":
            return MailKind.UNSPECIFIED
        return v

    @field_validator('room_number', 'initials', 'status', 'created_at', mode='before')
    @classmethod
    def reject_null(cls, v):
        """These columns are NOT NULL; omit the field instead of sending null"""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class MailItemResponse(BaseModel):
    """Mail item as shown to staff"""
    id: UUID
    room_number: str
    initials: str
    kind: MailKind
    status: MailStatus
    created_at: datetime

    @classmethod
    def from_record(cls, record: MailRecord) -> "MailItemResponse":
        return cls(
            id=record.id,
            room_number=record.room_number,
            initials=record.initials,
            kind=record.kind,
            status=record.status,
            created_at=record.created_at,
        )


class MailListResponse(BaseModel):
    """Result of the staff browse"""
    items: List[MailItemResponse]
    total: int
    filters_active: bool


class GuestMailItem(BaseModel):
    """Mail item as shown to a guest (labels, no record identifiers)"""
    kind: MailKind
    kind_label: str
    status: MailStatus
    status_label: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: MailRecord) -> "GuestMailItem":
        return cls(
            kind=record.kind,
            kind_label=kind_label(record.kind),
            status=record.status,
            status_label=guest_status_label(record.status),
            created_at=record.created_at,
        )


class GuestLookupResponse(BaseModel):
    """Result of a guest lookup.

    searched is always true here: a response only exists once a lookup was
    made, so an empty items list means "asked, nothing found".
    """
    room_number: str
    initials: str
    searched: bool = True
    items: List[GuestMailItem]


class PrintRowResponse(BaseModel):
    room_number: str
    initials: str
    date: str


class PrintListingResponse(BaseModel):
    """Printable snapshot of the filtered staff list"""
    title: str
    printed_on: str
    rows: List[PrintRowResponse]

    @classmethod
    def from_listing(cls, listing: PrintListing) -> "PrintListingResponse":
        return cls(
            title=listing.title,
            printed_on=listing.printed_on,
            rows=[PrintRowResponse(room_number=r.room_number, initials=r.initials, date=r.date) for r in listing.rows],
        )
