"""Tests for the /api/cron endpoints: secret check, counts, top-level failures."""

import pytest
from datetime import date, timedelta
from sqlalchemy.exc import OperationalError

from conftest import CRON_HEADERS, make_assignment, make_pattern, utc
from churchapp.api.routes import cron
from churchapp.config import settings
from churchapp.models.newcomer import Newcomer
from churchapp.models.notification import Notification
from churchapp.models.service import Service

ENDPOINTS = [
    "/api/cron/generate-services",
    "/api/cron/rota-reminders",
    "/api/cron/followup-reminders",
]
NOW = utc(2024, 1, 1, 2, 0)


@pytest.fixture
def fixed_now(monkeypatch):
    monkeypatch.setattr(cron, "_utc_now", lambda: NOW)
    return NOW


class TestCronAuth:
    @pytest.mark.parametrize("path", ENDPOINTS)
    def test_missing_secret(self, client, path):
        resp = client.get(path)
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}

    @pytest.mark.parametrize("path", ENDPOINTS)
    def test_wrong_secret(self, client, path):
        resp = client.get(path, headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    def test_secret_without_bearer_prefix(self, client):
        resp = client.get(ENDPOINTS[0], headers={"Authorization": "test-cron-secret"})
        assert resp.status_code == 401

    def test_production_without_secret_rejects(self, client, monkeypatch):
        monkeypatch.setattr(settings, "cron_secret", "")
        monkeypatch.setattr(settings, "app_env", "production")
        assert client.get(ENDPOINTS[0]).status_code == 401

    def test_development_without_secret_allows(self, client, monkeypatch):
        monkeypatch.setattr(settings, "cron_secret", "")
        monkeypatch.setattr(settings, "app_env", "development")
        assert client.get(ENDPOINTS[0]).status_code == 200


class TestGenerateServices:
    def test_no_patterns(self, client, fixed_now):
        resp = client.get("/api/cron/generate-services", headers=CRON_HEADERS)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["total_generated"] == 0
        assert body["message"] == "No active patterns found"

    def test_generates_within_window(self, client, db, template, fixed_now):
        make_pattern(db, template)
        body = client.get("/api/cron/generate-services", headers=CRON_HEADERS).json()
        # window is today .. today + 30 days: Jan 1 - Jan 31, 2024
        assert body["total_generated"] == 4
        assert body["results"][0]["last_generated_date"] == "2024-01-28"
        assert db.query(Service).count() == 4

    def test_rerun_creates_nothing(self, client, db, template, fixed_now):
        make_pattern(db, template)
        client.get("/api/cron/generate-services", headers=CRON_HEADERS)
        body = client.get("/api/cron/generate-services", headers=CRON_HEADERS).json()
        assert body["total_generated"] == 0
        assert db.query(Service).count() == 4

    def test_read_failure_is_500(self, client, db, monkeypatch):
        def boom(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(db, "query", boom)
        resp = client.get("/api/cron/generate-services", headers=CRON_HEADERS)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch patterns"}


class TestRotaReminders:
    def test_counts(self, client, db, member, fixed_now):
        make_assignment(db, member, date(2024, 1, 15))
        make_assignment(db, member, date(2024, 1, 3), duty_name="Choir")
        body = client.get("/api/cron/rota-reminders", headers=CRON_HEADERS).json()
        assert body["success"] is True
        assert body["sent"] == 2
        assert body["errors"] == 0
        assert db.query(Notification).filter(Notification.user_id == member.id).count() == 2

    def test_read_failure_is_500(self, client, db, monkeypatch):
        def boom(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(db, "query", boom)
        resp = client.get("/api/cron/rota-reminders", headers=CRON_HEADERS)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch services"}


class TestFollowupReminders:
    def test_counts(self, client, db, admin, fixed_now):
        db.add(
            Newcomer(
                full_name="Tunde Okafor",
                assigned_to=admin.id,
                assigned_at=NOW - timedelta(hours=72),
                followup_status="not_started",
            )
        )
        db.commit()
        body = client.get("/api/cron/followup-reminders", headers=CRON_HEADERS).json()
        assert body["overdue_count"] == 1
        assert body["notifications_created"] == 1
        assert body["reminders_count"] == 0
