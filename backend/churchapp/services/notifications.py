"""Create and query in-app notifications (notifications table)."""
from typing import Any

from sqlalchemy.orm import Session

from churchapp.core.constants import NOTIFICATION_DUTY_REMINDER
from churchapp.models.notification import Notification


def add_notification(
    db: Session,
    *,
    user_id: str,
    title: str,
    message: str,
    link: str | None = None,
    type: str = NOTIFICATION_DUTY_REMINDER,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    """Stage an unread notification on the session. Caller commits."""
    row = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        link=link,
        is_read=False,
        payload=metadata or {},
    )
    db.add(row)
    return row


def has_unread_mentioning(db: Session, user_id: str, type: str, text: str) -> bool:
    """True if the user has an unread notification of this type whose message contains text."""
    existing = (
        db.query(Notification.id)
        .filter(
            Notification.user_id == user_id,
            Notification.type == type,
            Notification.is_read.is_(False),
            Notification.message.contains(text, autoescape=True),
        )
        .first()
    )
    return existing is not None


def notification_to_dict(r: Notification) -> dict[str, Any]:
    return {
        "id": r.id,
        "type": r.type,
        "title": r.title,
        "message": r.message,
        "link": r.link,
        "read": bool(r.is_read),
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "metadata": r.payload or {},
    }
