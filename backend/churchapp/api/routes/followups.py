"""Admin follow-up reminders: list reminders due so far, schedule a new one."""
import logging
from datetime import date, datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session, joinedload

from churchapp.api.deps import require_admin
from churchapp.core.errors import NotFound
from churchapp.db.session import get_db
from churchapp.models.followup_reminder import FollowupReminder
from churchapp.models.newcomer import Newcomer
from churchapp.models.profile import Profile

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


def _reminder_to_dict(r: FollowupReminder) -> dict[str, Any]:
    return {
        "id": r.id,
        "newcomer_id": r.newcomer_id,
        "staff_id": r.staff_id,
        "reminder_type": r.reminder_type,
        "reminder_date": r.reminder_date.isoformat(),
        "is_sent": bool(r.is_sent),
        "sent_at": r.sent_at.isoformat() if r.sent_at else None,
        "newcomer": (
            {"id": r.newcomer.id, "full_name": r.newcomer.full_name, "followup_status": r.newcomer.followup_status}
            if r.newcomer
            else None
        ),
        "staff": {"id": r.staff.id, "full_name": r.staff.full_name, "email": r.staff.email} if r.staff else None,
    }


@router.get("/reminders")
def list_reminders(
    db: Session = Depends(get_db),
    staff_id: str | None = Query(None),
    is_sent: bool | None = Query(None),
    reminder_type: str | None = Query(None),
) -> dict[str, Any]:
    """Reminders due today or earlier, oldest first."""
    today = datetime.now(timezone.utc).date()
    q = db.query(FollowupReminder).options(
        joinedload(FollowupReminder.newcomer), joinedload(FollowupReminder.staff)
    )
    if staff_id:
        q = q.filter(FollowupReminder.staff_id == staff_id)
    if is_sent is not None:
        q = q.filter(FollowupReminder.is_sent.is_(is_sent))
    if reminder_type:
        q = q.filter(FollowupReminder.reminder_type == reminder_type)
    rows = q.filter(FollowupReminder.reminder_date <= today).order_by(FollowupReminder.reminder_date.asc()).all()
    return {"reminders": [_reminder_to_dict(r) for r in rows]}


class CreateReminderBody(BaseModel):
    newcomer_id: int
    staff_id: str = Field(..., min_length=1)
    reminder_type: str = Field(..., min_length=1, max_length=32)
    reminder_date: date


@router.post("/reminders", status_code=201)
def create_reminder(body: CreateReminderBody, db: Session = Depends(get_db)) -> dict[str, Any]:
    if db.query(Newcomer.id).filter(Newcomer.id == body.newcomer_id).first() is None:
        raise NotFound("Newcomer not found")
    if db.query(Profile.id).filter(Profile.id == body.staff_id).first() is None:
        raise NotFound("Staff member not found")
    row = FollowupReminder(
        newcomer_id=body.newcomer_id,
        staff_id=body.staff_id,
        reminder_type=body.reminder_type,
        reminder_date=body.reminder_date,
        is_sent=False,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Scheduled %s reminder %s for %s", row.reminder_type, row.id, row.reminder_date)
    return {"reminder": _reminder_to_dict(row)}
