"""Shared test fixtures and configuration.

Sets fake environment variables before any churchapp import so settings never
reach a real database or SMTP server, and provides an in-memory SQLite session
plus a TestClient wired to it.
"""

import os
import tempfile
from pathlib import Path

# Patch env vars BEFORE any churchapp imports
os.environ["DATABASE_URL"] = f"sqlite:///{Path(tempfile.gettempdir()) / 'churchapp_unused.db'}"
os.environ["APP_ENV"] = "test"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["APP_URL"] = "https://portal.example.org"

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from churchapp.db.base import Base
from churchapp.db.session import get_db
import churchapp.models  # noqa: F401  (register tables)
from churchapp.models.duty_type import DutyType
from churchapp.models.profile import Profile
from churchapp.models.recurring_pattern import RecurringPattern
from churchapp.models.service import Service
from churchapp.models.service_assignment import ServiceAssignment
from churchapp.models.service_template import ServiceTemplate

CRON_HEADERS = {"Authorization": "Bearer test-cron-secret"}
ADMIN_ID = "admin-1"
MEMBER_ID = "member-1"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def client(db):
    """TestClient whose routes share the test session."""
    from churchapp.main import app

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    row = Profile(id=ADMIN_ID, full_name="Pastor Ade", email="admin@example.org", role="admin")
    db.add(row)
    db.commit()
    return row


@pytest.fixture
def member(db):
    row = Profile(id=MEMBER_ID, full_name="Grace Bello", email="grace@example.org", role="member")
    db.add(row)
    db.commit()
    return row


@pytest.fixture
def template(db):
    row = ServiceTemplate(name="Sunday Service", description="Main service", default_time="10:00")
    db.add(row)
    db.commit()
    return row


def make_pattern(db, template, **kwargs):
    values = {
        "template_id": template.id,
        "pattern_type": "weekly",
        "day_of_week": 0,
        "start_date": date(2024, 1, 1),
        "is_active": True,
    }
    values.update(kwargs)
    row = RecurringPattern(**values)
    db.add(row)
    db.commit()
    return row


def make_assignment(db, member, service_date, status="confirmed", duty_name="Usher", template=None):
    service = Service(
        template_id=template.id if template else None,
        name=template.name if template else "Midweek Service",
        date=service_date,
        time="10:00",
    )
    duty = DutyType(name=duty_name)
    db.add_all([service, duty])
    db.flush()
    row = ServiceAssignment(service_id=service.id, member_id=member.id, duty_type_id=duty.id, status=status)
    db.add(row)
    db.commit()
    return row


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)
