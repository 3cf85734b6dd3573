from sqlalchemy import Column, Integer, String, DateTime
from app.core.config import settings
from app.db.base import Base

class InstructorAttempt(Base):
    __tablename__ = f"{settings.INSTRUCTOR_TABLE}_attempts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    attempted_at = Column(DateTime, nullable=False)
