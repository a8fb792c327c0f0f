"""Runs daily: rota reminders (14/2 days out) and follow-up reminders (overdue + due today)."""
import logging
from datetime import datetime, timezone

from churchapp.config import settings
from churchapp.core.errors import PersistenceError
from churchapp.db.session import SessionLocal
from churchapp.services.followups.reminders import run_followup_reminders
from churchapp.services.rota.reminders import run_rota_reminders

logger = logging.getLogger(__name__)


def run_rota_reminders_job() -> None:
    db = SessionLocal()
    try:
        result = run_rota_reminders(db, datetime.now(timezone.utc).date(), settings.app_url)
        logger.info("Rota reminders job: %s", result["message"])
    except PersistenceError as e:
        logger.error("Rota reminders job aborted: %s", e)
    finally:
        db.close()


def run_followup_reminders_job() -> None:
    db = SessionLocal()
    try:
        result = run_followup_reminders(
            db, datetime.now(timezone.utc), settings.followup_overdue_hours, settings.app_url
        )
        logger.info(
            "Follow-up reminders job: %s notification(s), %s error(s)",
            result["notifications_created"], result["errors"],
        )
    except PersistenceError as e:
        logger.error("Follow-up reminders job aborted: %s", e)
    finally:
        db.close()
