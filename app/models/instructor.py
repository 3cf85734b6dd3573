import enum

from sqlalchemy import Column, Integer, String, Text, Float, DateTime
from app.core.config import settings
from app.db.base import Base


class InstructorStatus(enum.IntEnum):
    PENDING = 0
    ACTIVE = 1
    DISABLED = 2
    SUSPENDED = 3
    DELISTED = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Instructor(Base):
    __tablename__ = settings.INSTRUCTOR_TABLE

    fino = Column(Integer, primary_key=True, autoincrement=False, comment="franchise number")
    name = Column(String(255), nullable=False)
    gender = Column(String(1), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    website = Column(String(255), nullable=True)
    password = Column(String(255), nullable=False)
    password_base = Column(String(255), nullable=True)
    # ",AB1,AB2," style coverage list
    postcodes = Column(Text, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    active = Column(Integer, default=0, nullable=False)
    status = Column(Integer, default=InstructorStatus.PENDING.value, nullable=False)
    priority = Column(Integer, default=0, nullable=False)
    priority_start_date = Column(DateTime, nullable=True)
    offer = Column(Integer, default=0, nullable=False)
    notes = Column(Text, nullable=True)
    about = Column(Text, nullable=True)
    offers = Column(Text, nullable=True)
