"""The table registry, the models and the initial migration describe the same schema."""

import re
from pathlib import Path

from churchapp.db.base import Base
from churchapp.db.tables import ALL_TABLE_NAMES

MIGRATION = Path(__file__).resolve().parent.parent / "alembic" / "versions" / "001_initial_schema.py"


def test_models_match_registry():
    assert set(Base.metadata.tables) == set(ALL_TABLE_NAMES)


def test_migration_creates_every_table():
    created = set(re.findall(r'op\.create_table\(\s*"(\w+)"', MIGRATION.read_text()))
    assert created == set(ALL_TABLE_NAMES)


def test_services_unique_per_template_and_date():
    constraints = {
        tuple(c.name for c in uc.columns)
        for uc in Base.metadata.tables["services"].constraints
        if uc.__class__.__name__ == "UniqueConstraint"
    }
    assert ("template_id", "date") in constraints
