"""In-app notification for a portal user.

type: notification kind ('duty_reminder', ...) for filtering.
is_read: flipped by the member from the notification center.
metadata: JSON for type-specific payload (reminder_type, service_id, newcomer_id, ...).
"""
from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import false, func

from churchapp.db.base import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    type = Column(String(32), nullable=False, default="duty_reminder", index=True)
    title = Column(String(256), nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String(512), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    payload = Column("metadata", JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)  # column name 'metadata' in DB
