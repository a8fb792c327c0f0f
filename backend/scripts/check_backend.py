#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from backend/:
  python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        errors.append("backend/.env missing. Copy from backend/.env.example and set DATABASE_URL, CRON_SECRET, etc.")
    else:
        print("OK  .env exists")

    # 2) Settings that matter in production
    from churchapp.config import settings
    if settings.is_production and not settings.cron_secret:
        errors.append("APP_ENV=production but CRON_SECRET is empty: every cron call will get 401.")
        print("FAIL CRON_SECRET not set for production")
    if not settings.smtp_user or not settings.smtp_password:
        print("WARN SMTP_USER/SMTP_PASSWORD not set; reminder emails will be skipped")

    # 3) DB connection and schema
    try:
        from sqlalchemy import inspect, text
        from churchapp.db.session import engine
        from churchapp.db.tables import ALL_TABLE_NAMES
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("OK  Database connection (DATABASE_URL)")
        missing = set(ALL_TABLE_NAMES) - set(inspect(engine).get_table_names())
        if missing:
            errors.append(f"Missing tables {sorted(missing)}. Run: alembic upgrade head")
            print("FAIL Missing tables:", ", ".join(sorted(missing)))
        else:
            print("OK  All tables present")
    except Exception as e:
        errors.append(f"Database: {e}")
        print("FAIL Database:", e)

    # 4) App import (catches missing deps, bad imports)
    try:
        from churchapp.main import app  # noqa: F401
        print("OK  App import (churchapp.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)

    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        return 1

    print("\nAll checks passed. Start with: uvicorn churchapp.main:app --reload")
    return 0


if __name__ == "__main__":
    sys.exit(main())
