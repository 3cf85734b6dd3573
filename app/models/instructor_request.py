from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from app.core.config import settings
from app.db.base import Base

class InstructorRequest(Base):
    """Password reset request."""
    __tablename__ = f"{settings.INSTRUCTOR_TABLE}_requests"

    id = Column(Integer, primary_key=True, index=True)
    fino = Column(Integer, ForeignKey(f"{settings.INSTRUCTOR_TABLE}.fino"), nullable=False)
    token = Column(String(128), unique=True, nullable=False)
    used = Column(Boolean, default=False, nullable=False)
    expired_at = Column(DateTime, nullable=False)
