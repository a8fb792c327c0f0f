"""Tests for churchapp.services.email: SMTP send and reminder templates."""

import smtplib
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from churchapp.config import settings
from churchapp.services.email import followup_overdue_email, rota_reminder_email, send_email
from churchapp.services.email.send import ERROR, SENT, SKIPPED
from churchapp.services.email.templates import format_service_date


@pytest.fixture
def smtp_configured(monkeypatch):
    monkeypatch.setattr(settings, "smtp_user", "church@example.org")
    monkeypatch.setattr(settings, "smtp_password", "app-password")


class TestSendEmail:
    def test_skipped_without_credentials(self):
        assert send_email("grace@example.org", "Hi", "<p>Hi</p>").status == SKIPPED

    def test_skipped_without_address(self, smtp_configured):
        result = send_email(None, "Hi", "<p>Hi</p>")
        assert result.status == SKIPPED
        assert result.ok is True

    def test_sent(self, smtp_configured):
        server = MagicMock()
        with patch("churchapp.services.email.send.smtplib.SMTP") as smtp:
            smtp.return_value.__enter__.return_value = server
            result = send_email("grace@example.org", "Hi", "<p>Hi</p>", "Hi")
        assert result.status == SENT
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("church@example.org", "app-password")
        assert server.sendmail.call_args[0][1] == ["grace@example.org"]

    def test_smtp_error_is_reported_not_raised(self, smtp_configured):
        with patch("churchapp.services.email.send.smtplib.SMTP", side_effect=smtplib.SMTPException("auth failed")):
            result = send_email("grace@example.org", "Hi", "<p>Hi</p>")
        assert result.status == ERROR
        assert result.ok is False
        assert "auth failed" in result.error


class TestRotaReminderEmail:
    @pytest.mark.parametrize(
        "reminder_type,subject",
        [
            ("14-day", "Reminder: Service Assignment in 14 Days"),
            ("2-day", "Reminder: Service Assignment in 2 Days"),
        ],
    )
    def test_subjects(self, reminder_type, subject):
        content = rota_reminder_email(
            reminder_type=reminder_type,
            member_name="Grace",
            service_name="Sunday Service",
            service_date=date(2024, 1, 7),
            service_time="10:00",
            duty_name="Usher",
        )
        assert content.subject == subject
        assert "Sunday, January 7, 2024 at 10:00" in content.text
        assert "Usher" in content.html

    def test_unknown_type_gets_generic_subject(self):
        content = rota_reminder_email(
            reminder_type="assignment",
            member_name="Grace",
            service_name="Sunday Service",
            service_date=date(2024, 1, 7),
            service_time=None,
            duty_name="Usher",
        )
        assert content.subject == "Service Assignment Reminder"
        assert "scheduled to serve as Usher." in content.text

    def test_html_is_escaped(self):
        content = rota_reminder_email(
            reminder_type="2-day",
            member_name="<b>Grace</b>",
            service_name="Sunday Service",
            service_date=date(2024, 1, 7),
            service_time=None,
            duty_name="Usher",
        )
        assert "<b>Grace</b>" not in content.html
        assert "&lt;b&gt;Grace&lt;/b&gt;" in content.html

    def test_format_service_date(self):
        assert format_service_date(date(2024, 1, 7)) == "Sunday, January 7, 2024"


class TestFollowupOverdueEmail:
    def test_subject_and_whatsapp_link(self):
        content = followup_overdue_email(
            staff_name="Pastor Ade",
            newcomer_name="Tunde Okafor",
            newcomer_email="tunde@example.org",
            newcomer_phone="+44 7700 900123",
            days_overdue=3,
            dashboard_url="https://portal.example.org/dashboard",
        )
        assert content.subject == "Overdue Follow-up: Tunde Okafor (3 days overdue)"
        assert "https://wa.me/447700900123" in content.html
        assert "Days Overdue: 3" in content.text

    def test_single_day_and_no_phone(self):
        content = followup_overdue_email(
            staff_name="Pastor Ade",
            newcomer_name="Tunde Okafor",
            newcomer_email=None,
            newcomer_phone=None,
            days_overdue=1,
            dashboard_url="https://portal.example.org/dashboard",
        )
        assert content.subject == "Overdue Follow-up: Tunde Okafor (1 day overdue)"
        assert "wa.me" not in content.html
