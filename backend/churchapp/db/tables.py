"""
Single source of truth for database tables that exist after migrations (001).

Alembic env.py and scripts/check_backend.py compare these names against the models and the live DB.
"""
# All tables that exist in the DB. Must match models and migrations.
ALL_TABLE_NAMES = (
    "profiles",
    "service_templates",
    "service_recurring_patterns",
    "services",
    "duty_types",
    "service_assignments",
    "newcomers",
    "followup_reminders",
    "notifications",
)
