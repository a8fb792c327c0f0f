"""Service template: name and default time shared by every generated service."""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from churchapp.db.base import Base


class ServiceTemplate(Base):
    __tablename__ = "service_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    default_time = Column(String(8), nullable=True)  # HH:MM
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    patterns = relationship("RecurringPattern", back_populates="template")
