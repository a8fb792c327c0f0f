#!/usr/bin/env python3
"""
Run one daily job by hand, without the HTTP endpoint or the scheduler.
Run: cd backend && python scripts/run_cron_job.py generate-services|rota-reminders|followup-reminders
"""
import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from churchapp.config import settings
from churchapp.core.errors import PersistenceError
from churchapp.db.session import SessionLocal
from churchapp.services.followups.reminders import run_followup_reminders
from churchapp.services.rota.generator import run_service_generation
from churchapp.services.rota.reminders import run_rota_reminders

JOBS = {
    "generate-services": lambda db, now: run_service_generation(db, now.date(), settings.generation_window_days),
    "rota-reminders": lambda db, now: run_rota_reminders(db, now.date(), settings.app_url),
    "followup-reminders": lambda db, now: run_followup_reminders(
        db, now, settings.followup_overdue_hours, settings.app_url
    ),
}


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("job", choices=sorted(JOBS))
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        result = JOBS[args.job](db, datetime.now(timezone.utc))
    except PersistenceError as e:
        print(f"{args.job} aborted: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
