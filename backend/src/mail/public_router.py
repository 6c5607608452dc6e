"""Guest mail lookup endpoint

Guests do not sign in. They see only the items whose room number and
initials both match exactly what they typed. Signed-in staff are refused
the lookup by the permission matrix and sent to the staff list.
"""

import logging

from fastapi import APIRouter, Depends, Query

from auth.dependencies import require_action
from auth.gate import MailAction
from domain.mail import normalize_identifier
from observability.metrics import guest_lookups_total
from .dependencies import QueryEngine
from .schemas import GuestLookupResponse, GuestMailItem

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public/mail", tags=["guest"])


@router.get(
    "",
    response_model=GuestLookupResponse,
    dependencies=[Depends(require_action(MailAction.LOOKUP))],
)
async def lookup_mail(
    engine: QueryEngine,
    room_number: str = Query(..., description="Room number, matched exactly"),
    initials: str = Query(..., description="Guest initials, matched exactly"),
):
    """Look up mail for one room and one set of initials."""
    records = await engine.lookup(room_number, initials)

    guest_lookups_total.labels(outcome="found" if records else "empty").inc()
    logger.info(f"Guest lookup returned {len(records)} mail items")

    return GuestLookupResponse(
        room_number=normalize_identifier(room_number),
        initials=normalize_identifier(initials),
        items=[GuestMailItem.from_record(r) for r in records],
    )
