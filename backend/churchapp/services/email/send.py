"""
Send notification emails via SMTP (Google Gmail or other).
Set SMTP_USER, SMTP_PASSWORD (and optionally NOTIFY_FROM) in .env. Use a Gmail App Password.
If SMTP is not configured, send_email no-ops and reports "skipped" so cron runs never fail on it.
"""
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from churchapp.config import settings

logger = logging.getLogger(__name__)

SENT = "sent"
SKIPPED = "skipped"
ERROR = "error"


@dataclass(frozen=True)
class EmailResult:
    status: str  # sent | skipped | error
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Skipped counts as success: unset credentials are not a failure."""
        return self.status != ERROR


def _from_address() -> str:
    if (settings.notify_from or "").strip():
        return settings.notify_from.strip()
    if settings.smtp_user:
        return f"Church Portal <{settings.smtp_user}>"
    return "Church Portal <noreply@localhost>"


def send_email(to: str | None, subject: str, html: str, text: str | None = None) -> EmailResult:
    """Send one email. Never raises: returns sent, skipped (no SMTP config / no address) or error."""
    to = (to or "").strip()
    if not to:
        return EmailResult(SKIPPED)
    if not settings.smtp_user or not settings.smtp_password:
        logger.debug("SMTP_USER or SMTP_PASSWORD not set; skipping email to %s", to)
        return EmailResult(SKIPPED)
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = _from_address()
    msg["To"] = to
    if text:
        msg.attach(MIMEText(text, "plain"))
    msg.attach(MIMEText(html, "html"))
    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as server:
            server.starttls()
            server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(settings.smtp_user, [to], msg.as_string())
        logger.info("Email sent to %s: %s", to, subject)
        return EmailResult(SENT)
    except (smtplib.SMTPException, OSError) as e:
        logger.exception("Failed to send email to %s: %s", to, e)
        return EmailResult(ERROR, error=str(e))
