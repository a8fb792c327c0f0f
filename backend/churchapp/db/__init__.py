from churchapp.db.base import Base
from churchapp.db.session import get_db, engine, SessionLocal
from churchapp.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
