"""Newcomer awaiting follow-up by an assigned staff member.

followup_status: not_started | in_progress | contacted | completed.
Overdue clock starts at assigned_at, falling back to created_at.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from churchapp.db.base import Base


class Newcomer(Base):
    __tablename__ = "newcomers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(256), nullable=False)
    email = Column(String(320), nullable=True)
    phone = Column(String(32), nullable=True)
    assigned_to = Column(String(64), ForeignKey("profiles.id"), nullable=True, index=True)
    assigned_at = Column(DateTime(timezone=True), nullable=True)
    followup_status = Column(String(16), nullable=False, server_default="not_started", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    staff = relationship("Profile")
