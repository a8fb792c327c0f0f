"""Member assigned to a duty on a service. Only status='confirmed' rows get reminders."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from churchapp.db.base import Base


class ServiceAssignment(Base):
    __tablename__ = "service_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)
    member_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    duty_type_id = Column(Integer, ForeignKey("duty_types.id"), nullable=True)
    status = Column(String(16), nullable=False, server_default="pending")  # pending | confirmed | declined
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    service = relationship("Service")
    member = relationship("Profile")
    duty_type = relationship("DutyType")
