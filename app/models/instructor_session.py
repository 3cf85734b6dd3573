from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.sql import func
from app.core.config import settings
from app.db.base import Base

class InstructorSession(Base):
    __tablename__ = f"{settings.INSTRUCTOR_TABLE}_sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(512), unique=True, nullable=False)
    fino = Column(Integer, ForeignKey(f"{settings.INSTRUCTOR_TABLE}.fino"), nullable=False)
    is_revoked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    expired_at = Column(DateTime)
