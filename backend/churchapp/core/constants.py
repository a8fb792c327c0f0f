"""
Centralized constants for cron jobs, reminders and notifications.

Change job IDs, offsets or notification kinds here instead of scattering literals across
main, routes and services. Deployment-specific values (secrets, window sizes) live in config.
"""

# Scheduler job IDs (must match ids used in main.py add_job)
GENERATE_SERVICES_JOB_ID = "generate_services"
ROTA_REMINDERS_JOB_ID = "rota_reminders"
FOLLOWUP_REMINDERS_JOB_ID = "followup_reminders"

# Daily run times (UTC) for the in-process scheduler
GENERATE_SERVICES_HOUR = 2
ROTA_REMINDERS_HOUR = 8
FOLLOWUP_REMINDERS_HOUR = 9

# Pattern types accepted by the date evaluator
PATTERN_TYPES = ("weekly", "bi_weekly", "monthly", "custom")

# Rota reminders: days ahead of the service -> reminder label
ROTA_REMINDER_OFFSETS: tuple[tuple[int, str], ...] = (
    (14, "14-day"),
    (2, "2-day"),
)
ASSIGNMENT_CONFIRMED = "confirmed"

# Follow-up statuses that still count as "waiting for contact"
FOLLOWUP_OPEN_STATUSES = ("not_started", "in_progress")

# Notification kinds
NOTIFICATION_DUTY_REMINDER = "duty_reminder"

# Manual generation: default range when the admin gives no end date
MANUAL_GENERATION_DEFAULT_DAYS = 90
# Manual generation without a pattern creates one service per day; cap the range
MANUAL_GENERATION_MAX_DAYS = 366

# Notifications API
NOTIFICATIONS_DEFAULT_LIMIT = 80
NOTIFICATIONS_MAX_LIMIT = 200
