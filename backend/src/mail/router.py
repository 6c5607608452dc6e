"""Staff mail desk API endpoints

Every endpoint here requires a signed-in staff member; the permission
matrix in auth.gate decides which action each route performs. Mutations return the
stored record; clients re-query the list afterwards instead of patching
their local copy.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from auth.dependencies import CurrentStaff, require_action
from auth.gate import MailAction
from config import get_settings
from domain.mail import StaffFilter, build_print_listing
from observability.metrics import (
    mail_browse_total,
    mail_items_created_total,
    mail_items_edited_total,
    mail_items_received_total,
)
from .dependencies import Lifecycle, QueryEngine
from .schemas import (
    MailItemCreate,
    MailItemResponse,
    MailItemUpdate,
    MailListResponse,
    PrintListingResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mail", tags=["mail"])


@router.get(
    "",
    response_model=MailListResponse,
    dependencies=[Depends(require_action(MailAction.BROWSE))],
)
async def list_mail(
    current_user: CurrentStaff,
    engine: QueryEngine,
    q: Optional[str] = Query(None, description="Substring of room number or initials (case-insensitive)"),
    status_filter: Optional[str] = Query("all", alias="status", description="all | pending | received"),
    date: Optional[str] = Query(None, description="Calendar day YYYY-MM-DD in the display time zone"),
):
    """Browse mail items, newest first.

    Filters combine with AND; omitted filters match everything.
    """
    criteria = StaffFilter.from_params(search_term=q or "", status=status_filter or "all", date_value=date or "")
    records = await engine.browse(criteria)

    mail_browse_total.labels(filtered=str(not criteria.is_default).lower()).inc()

    return MailListResponse(
        items=[MailItemResponse.from_record(r) for r in records],
        total=len(records),
        filters_active=not criteria.is_default,
    )


@router.post(
    "",
    response_model=MailItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_action(MailAction.CREATE))],
)
async def create_mail_item(
    mail_data: MailItemCreate,
    current_user: CurrentStaff,
    lifecycle: Lifecycle,
):
    """Log a new mail item; it starts out pending."""
    record = await lifecycle.create(
        room_number=mail_data.room_number,
        initials=mail_data.initials,
        kind=mail_data.kind,
    )

    mail_items_created_total.labels(kind=record.kind.value).inc()
    logger.info(
        f"Mail item {record.id} logged by staff {current_user.id}",
        extra={"mail_id": record.id, "staff_id": current_user.id},
    )

    return MailItemResponse.from_record(record)


@router.post(
    "/{mail_id}/received",
    response_model=MailItemResponse,
    dependencies=[Depends(require_action(MailAction.MARK_RECEIVED))],
)
async def mark_mail_received(
    mail_id: UUID,
    current_user: CurrentStaff,
    lifecycle: Lifecycle,
):
    """Mark a mail item as picked up.

    Repeating the call on a received item succeeds without changing it.
    """
    record = await lifecycle.mark_received(mail_id)

    mail_items_received_total.inc()
    logger.info(
        f"Mail item {mail_id} marked received by staff {current_user.id}",
        extra={"mail_id": mail_id, "staff_id": current_user.id},
    )

    return MailItemResponse.from_record(record)


@router.patch(
    "/{mail_id}",
    response_model=MailItemResponse,
    dependencies=[Depends(require_action(MailAction.EDIT))],
)
async def update_mail_item(
    mail_id: UUID,
    update_data: MailItemUpdate,
    current_user: CurrentStaff,
    lifecycle: Lifecycle,
):
    """Overwrite the supplied fields of a mail item.

    This is a correction tool: status may be set back to pending and
    created_at may be changed.
    """
    changes = update_data.model_dump(exclude_unset=True)
    record = await lifecycle.edit(mail_id, changes)

    mail_items_edited_total.inc()
    logger.info(
        f"Mail item {mail_id} edited by staff {current_user.id} (fields: {sorted(changes)})",
        extra={"mail_id": mail_id, "staff_id": current_user.id},
    )

    return MailItemResponse.from_record(record)


@router.get(
    "/print",
    response_model=PrintListingResponse,
    dependencies=[Depends(require_action(MailAction.PRINT))],
)
async def print_mail_list(
    current_user: CurrentStaff,
    engine: QueryEngine,
    q: Optional[str] = Query(None),
    status_filter: Optional[str] = Query("all", alias="status"),
    date: Optional[str] = Query(None),
):
    """Printable listing of the filtered mail items (room, initials, date)."""
    settings = get_settings()
    criteria = StaffFilter.from_params(search_term=q or "", status=status_filter or "all", date_value=date or "")
    records = await engine.browse(criteria)

    listing = build_print_listing(
        records,
        display_tz=settings.display_tz,
        title=settings.LISTING_TITLE,
        printed_at=datetime.now(timezone.utc),
    )
    return PrintListingResponse.from_listing(listing)
