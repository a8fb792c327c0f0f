"""One dated occurrence of a service. At most one row per (template_id, date); the DB enforces it."""
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from churchapp.db.base import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (UniqueConstraint("template_id", "date", name="uq_services_template_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(Integer, ForeignKey("service_templates.id"), nullable=True, index=True)
    name = Column(String(256), nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(8), nullable=True)  # HH:MM
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
