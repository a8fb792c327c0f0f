"""
FastAPI app entrypoint.

Church portal backend: recurring service generation, rota and follow-up reminders,
member notifications. Daily work is triggered by an external cron hitting /api/cron/*,
or by the in-process scheduler when SCHEDULER_ENABLED=true.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from churchapp.api.routes import cron, followups, notifications, rota
from churchapp.config import settings
from churchapp.core.constants import (
    FOLLOWUP_REMINDERS_HOUR,
    FOLLOWUP_REMINDERS_JOB_ID,
    GENERATE_SERVICES_HOUR,
    GENERATE_SERVICES_JOB_ID,
    ROTA_REMINDERS_HOUR,
    ROTA_REMINDERS_JOB_ID,
)
from churchapp.core.errors import Forbidden, InvalidPattern, NotFound, PersistenceError, Unauthorized, handle_app_error
from churchapp.scheduler.generate_services_job import run_generate_services_job
from churchapp.scheduler.reminders_job import run_followup_reminders_job, run_rota_reminders_job

logger = logging.getLogger(__name__)


def build_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(run_generate_services_job, "cron", hour=GENERATE_SERVICES_HOUR, minute=0, id=GENERATE_SERVICES_JOB_ID)
    scheduler.add_job(run_rota_reminders_job, "cron", hour=ROTA_REMINDERS_HOUR, minute=0, id=ROTA_REMINDERS_JOB_ID)
    scheduler.add_job(run_followup_reminders_job, "cron", hour=FOLLOWUP_REMINDERS_HOUR, minute=0, id=FOLLOWUP_REMINDERS_JOB_ID)
    return scheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = None
    if settings.scheduler_enabled:
        scheduler = build_scheduler()
        scheduler.start()
        logger.info("In-process scheduler started (%s jobs)", len(scheduler.get_jobs()))
    app.state.scheduler = scheduler
    yield
    if scheduler is not None:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Church Portal", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS (comma-separated) for the deployed portal
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for _exc in (Unauthorized, Forbidden, NotFound, InvalidPattern, PersistenceError):
    app.add_exception_handler(_exc, handle_app_error)

app.include_router(cron.router, prefix="/api/cron", tags=["cron"])
app.include_router(rota.router, prefix="/api/admin/rota", tags=["rota"])
app.include_router(followups.router, prefix="/api/admin/followups", tags=["followups"])
app.include_router(notifications.router, prefix="/api", tags=["notifications"])


@app.get("/", include_in_schema=False)
def root():
    return {"message": "Church Portal API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
