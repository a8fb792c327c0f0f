"""
Cron endpoints, called once a day by an external scheduler (GET + Bearer CRON_SECRET).

200 with counts (per-item problems are inside the body); 401 on bad secret;
500 {"error": ...} when the run's top-level read fails (handled in main.py).
"""
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from churchapp.api.deps import require_cron_secret
from churchapp.config import settings
from churchapp.db.session import get_db
from churchapp.services.followups.reminders import run_followup_reminders
from churchapp.services.rota.generator import run_service_generation
from churchapp.services.rota.reminders import run_rota_reminders

router = APIRouter(dependencies=[Depends(require_cron_secret)])
logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/generate-services")
def generate_services(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Materialize services for every active recurring pattern over the next GENERATION_WINDOW_DAYS."""
    return run_service_generation(db, _utc_now().date(), settings.generation_window_days)


@router.get("/rota-reminders")
def rota_reminders(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Remind confirmed members of services 14 and 2 days away."""
    return run_rota_reminders(db, _utc_now().date(), settings.app_url)


@router.get("/followup-reminders")
def followup_reminders(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Overdue follow-ups and follow-up reminders due today."""
    return run_followup_reminders(db, _utc_now(), settings.followup_overdue_hours, settings.app_url)
