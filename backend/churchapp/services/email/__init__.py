from churchapp.services.email.send import EmailResult, send_email
from churchapp.services.email.templates import (
    EmailContent,
    followup_overdue_email,
    rota_reminder_email,
)

__all__ = ["EmailContent", "EmailResult", "followup_overdue_email", "rota_reminder_email", "send_email"]
