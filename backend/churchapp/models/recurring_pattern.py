"""Recurring pattern for a service template.

pattern_type: weekly | bi_weekly | monthly | custom.
day_of_week: 0 = Sunday .. 6 = Saturday.
week_of_month: 1-5, monthly only ("2nd Sunday").
interval_weeks: >= 1, custom only.
last_generated_date: watermark; only moves forward, never past the last materialized service.
"""
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, true

from churchapp.db.base import Base


class RecurringPattern(Base):
    __tablename__ = "service_recurring_patterns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(Integer, ForeignKey("service_templates.id"), nullable=False, index=True)
    pattern_type = Column(String(16), nullable=False)
    day_of_week = Column(Integer, nullable=True)
    week_of_month = Column(Integer, nullable=True)
    interval_weeks = Column(Integer, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    last_generated_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    template = relationship("ServiceTemplate", back_populates="patterns")
