"""Member/staff profile. id is the hosted auth user id; role "admin" unlocks admin routes."""
from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from churchapp.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)
    full_name = Column(String(256), nullable=True)
    email = Column(String(320), nullable=True)
    phone = Column(String(32), nullable=True)
    role = Column(String(32), nullable=True, server_default="member")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
