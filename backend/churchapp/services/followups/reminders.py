"""
Follow-up reminders, run once a day:

1) Overdue: newcomers assigned to staff more than FOLLOWUP_OVERDUE_HOURS ago (assigned_at, or
   created_at when never stamped) and still not contacted. One notification per newcomer unless
   the staff member already has an unread duty reminder naming them (best-effort dedup).
2) Due: followup_reminders rows for today not yet sent. The notification and the is_sent flag
   are committed together, so a reminder is never marked sent without its notification.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from churchapp.core.constants import FOLLOWUP_OPEN_STATUSES, NOTIFICATION_DUTY_REMINDER
from churchapp.core.errors import PersistenceError
from churchapp.models.followup_reminder import FollowupReminder
from churchapp.models.newcomer import Newcomer
from churchapp.services.email import followup_overdue_email, send_email
from churchapp.services.notifications import add_notification, has_unread_mentioning

logger = logging.getLogger(__name__)


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def days_overdue(since: datetime, now: datetime) -> int:
    hours = (now - _as_utc(since)).total_seconds() / 3600
    return math.floor(hours / 24)


def _load_overdue(db: Session, cutoff: datetime) -> list[Newcomer]:
    clock = func.coalesce(Newcomer.assigned_at, Newcomer.created_at)
    return (
        db.query(Newcomer)
        .options(joinedload(Newcomer.staff))
        .filter(
            Newcomer.assigned_to.isnot(None),
            Newcomer.followup_status.in_(FOLLOWUP_OPEN_STATUSES),
            clock < cutoff,
        )
        .order_by(Newcomer.id.asc())
        .all()
    )


def _load_due_reminders(db: Session, today: date) -> list[FollowupReminder]:
    return (
        db.query(FollowupReminder)
        .options(joinedload(FollowupReminder.newcomer), joinedload(FollowupReminder.staff))
        .filter(FollowupReminder.reminder_date == today, FollowupReminder.is_sent.is_(False))
        .order_by(FollowupReminder.id.asc())
        .all()
    )


def run_followup_reminders(
    db: Session,
    now: datetime,
    overdue_hours: int,
    app_url: str,
) -> dict[str, Any]:
    """
    Raises PersistenceError if either list cannot be read (nothing is written in that case).
    Per-item write failures are rolled back, logged, counted in errors; the run continues.
    """
    now = _as_utc(now)
    today = now.date()
    cutoff = now - timedelta(hours=overdue_hours)
    dashboard_url = f"{app_url.rstrip('/')}/dashboard"

    try:
        overdue = _load_overdue(db, cutoff)
        due = _load_due_reminders(db, today)
    except SQLAlchemyError as e:
        logger.exception("Error fetching follow-ups: %s", e)
        raise PersistenceError("Failed to fetch follow-ups") from e

    # Snapshot plain values up front: a rollback on one item expires every loaded instance
    overdue_items = [
        {
            "id": n.id,
            "name": n.full_name,
            "email": n.email,
            "phone": n.phone,
            "staff_id": n.assigned_to,
            "staff_name": (n.staff.full_name or n.staff.email) if n.staff else None,
            "staff_email": n.staff.email if n.staff else None,
            "since": n.assigned_at or n.created_at,
        }
        for n in overdue
    ]
    due_items = [
        {
            "id": r.id,
            "staff_id": r.staff_id,
            "newcomer_id": r.newcomer_id,
            "newcomer_name": r.newcomer.full_name if r.newcomer else None,
        }
        for r in due
    ]

    created = skipped = errors = 0

    for item in overdue_items:
        try:
            if has_unread_mentioning(db, item["staff_id"], NOTIFICATION_DUTY_REMINDER, item["name"]):
                skipped += 1
                continue
            n_days = days_overdue(item["since"], now)
            add_notification(
                db,
                user_id=item["staff_id"],
                title=f"Overdue Follow-up: {item['name']}",
                message=(
                    f"{item['name']} was assigned to you {n_days} day{'s' if n_days != 1 else ''} ago "
                    "and hasn't been contacted yet."
                ),
                link=dashboard_url,
                metadata={"newcomer_id": item["id"], "days_overdue": n_days},
            )
            db.commit()
            created += 1
        except SQLAlchemyError as e:
            db.rollback()
            errors += 1
            logger.exception("Failed to create overdue notification for newcomer %s: %s", item["id"], e)
            continue

        if item["staff_email"]:
            content = followup_overdue_email(
                staff_name=item["staff_name"] or item["staff_email"],
                newcomer_name=item["name"],
                newcomer_email=item["email"],
                newcomer_phone=item["phone"],
                days_overdue=n_days,
                dashboard_url=dashboard_url,
            )
            result = send_email(item["staff_email"], content.subject, content.html, content.text)
            if not result.ok:
                logger.warning("Overdue follow-up email to %s failed: %s", item["staff_email"], result.error)

    for item in due_items:
        if not item["staff_id"]:
            continue
        name = item["newcomer_name"]
        try:
            add_notification(
                db,
                user_id=item["staff_id"],
                title=f"Follow-up Reminder: {name or 'Newcomer'}",
                message=f"Reminder: Follow up with {name or 'assigned newcomer'} today.",
                link=dashboard_url,
                metadata={"newcomer_id": item["newcomer_id"], "reminder_id": item["id"]},
            )
            db.query(FollowupReminder).filter(FollowupReminder.id == item["id"]).update(
                {FollowupReminder.is_sent: True, FollowupReminder.sent_at: now},
                synchronize_session=False,
            )
            db.commit()
            created += 1
        except SQLAlchemyError as e:
            db.rollback()
            errors += 1
            logger.exception("Failed to deliver follow-up reminder %s: %s", item["id"], e)

    logger.info(
        "Follow-up reminders: overdue=%s due=%s created=%s skipped=%s errors=%s",
        len(overdue_items), len(due_items), created, skipped, errors,
    )
    return {
        "success": True,
        "overdue_count": len(overdue_items),
        "reminders_count": len(due_items),
        "notifications_created": created,
        "skipped_duplicates": skipped,
        "errors": errors,
    }
