"""Scheduled reminder for a staff member to follow up with a newcomer on reminder_date."""
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import false, func

from churchapp.db.base import Base


class FollowupReminder(Base):
    __tablename__ = "followup_reminders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    newcomer_id = Column(Integer, ForeignKey("newcomers.id"), nullable=False, index=True)
    staff_id = Column(String(64), ForeignKey("profiles.id"), nullable=True, index=True)
    reminder_type = Column(String(32), nullable=False, server_default="follow_up")
    reminder_date = Column(Date, nullable=False, index=True)
    is_sent = Column(Boolean, nullable=False, default=False, server_default=false())
    sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    newcomer = relationship("Newcomer")
    staff = relationship("Profile")
