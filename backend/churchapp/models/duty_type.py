from sqlalchemy import Column, Integer, String, Text

from churchapp.db.base import Base


class DutyType(Base):
    __tablename__ = "duty_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False)
    description = Column(Text, nullable=True)
