"""
Rota reminders: once a day, remind confirmed members about services exactly 14 and 2 days away.

No dedup against earlier runs: each run targets different absolute dates, so an assignment
lands in the 14-day list once and the 2-day list once as the calendar moves on.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from churchapp.core.constants import ASSIGNMENT_CONFIRMED, ROTA_REMINDER_OFFSETS
from churchapp.core.errors import PersistenceError
from churchapp.models.service import Service
from churchapp.models.service_assignment import ServiceAssignment
from churchapp.services.email import rota_reminder_email, send_email
from churchapp.services.email.send import SKIPPED
from churchapp.services.notifications import add_notification

logger = logging.getLogger(__name__)


def reminder_targets(today: date) -> dict[date, str]:
    """Target service date -> reminder label ('14-day', '2-day')."""
    return {today + timedelta(days=days): label for days, label in ROTA_REMINDER_OFFSETS}


def _load_due_assignments(db: Session, targets: dict[date, str]) -> tuple[list[Service], list[ServiceAssignment]]:
    try:
        services = db.query(Service).filter(Service.date.in_(list(targets))).all()
        if not services:
            return [], []
        assignments = (
            db.query(ServiceAssignment)
            .options(joinedload(ServiceAssignment.member), joinedload(ServiceAssignment.duty_type))
            .filter(
                ServiceAssignment.service_id.in_([s.id for s in services]),
                ServiceAssignment.status == ASSIGNMENT_CONFIRMED,
            )
            .order_by(ServiceAssignment.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Error fetching services/assignments for rota reminders: %s", e)
        raise PersistenceError("Failed to fetch services") from e
    return services, assignments


def run_rota_reminders(db: Session, today: date, app_url: str) -> dict[str, Any]:
    """
    One notification (and one email when the member has an address) per confirmed assignment
    on a target date. Raises PersistenceError if services/assignments cannot be read; a failed
    notification write is logged, counted in errors and the run continues.
    """
    targets = reminder_targets(today)
    services, assignments = _load_due_assignments(db, targets)
    if not services:
        return {"success": True, "message": "No services requiring reminders", "sent": 0, "errors": 0}

    services_by_id = {s.id: s for s in services}
    sent = errors = emails_sent = emails_skipped = 0
    for a in assignments:
        service = services_by_id.get(a.service_id)
        member = a.member
        if service is None or member is None:
            continue
        reminder_type = targets[service.date]
        duty_name = a.duty_type.name if a.duty_type else "Duty"
        member_name = member.full_name or member.email or "Member"
        # Plain values: a rollback below expires ORM instances
        assignment_id, member_id, member_email = a.id, member.id, member.email
        service_id, service_name, service_date, service_time = service.id, service.name, service.date, service.time

        content = rota_reminder_email(
            reminder_type=reminder_type,
            member_name=member_name,
            service_name=service_name,
            service_date=service_date,
            service_time=service_time,
            duty_name=duty_name,
        )
        try:
            add_notification(
                db,
                user_id=member_id,
                title=f"{content.subject}: {service_name}",
                message=f"You are scheduled to serve as {duty_name} at {service_name} on {service_date.isoformat()}.",
                link=f"{app_url.rstrip('/')}/dashboard",
                metadata={"reminder_type": reminder_type, "service_id": service_id, "assignment_id": assignment_id},
            )
            db.commit()
            sent += 1
        except SQLAlchemyError as e:
            db.rollback()
            errors += 1
            logger.exception("Failed to create rota reminder for assignment %s: %s", assignment_id, e)
            continue

        result = send_email(member_email, content.subject, content.html, content.text)
        if result.status == SKIPPED:
            emails_skipped += 1
        elif result.ok:
            emails_sent += 1
        else:
            logger.warning("Rota reminder email to %s failed: %s", member_email, result.error)

    logger.info("Rota reminders: sent=%s errors=%s emails_sent=%s", sent, errors, emails_sent)
    return {
        "success": True,
        "message": f"Sent {sent} reminders, {errors} errors",
        "sent": sent,
        "errors": errors,
        "emails_sent": emails_sent,
        "emails_skipped": emails_skipped,
    }
