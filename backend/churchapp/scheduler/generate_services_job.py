"""Runs daily: materialize services for active recurring patterns (same work as GET /api/cron/generate-services)."""
import logging
from datetime import datetime, timezone

from churchapp.config import settings
from churchapp.core.errors import PersistenceError
from churchapp.db.session import SessionLocal
from churchapp.services.rota.generator import run_service_generation

logger = logging.getLogger(__name__)


def run_generate_services_job() -> None:
    db = SessionLocal()
    try:
        result = run_service_generation(db, datetime.now(timezone.utc).date(), settings.generation_window_days)
        logger.info("Generate services job: %s", result["message"])
    except PersistenceError as e:
        logger.error("Generate services job aborted: %s", e)
    finally:
        db.close()
