from sqlalchemy import Column, Integer, Text, ForeignKey
from app.core.config import settings
from app.db.base import Base

class Testimonial(Base):
    __tablename__ = settings.TESTIMONIAL_TABLE

    id = Column(Integer, primary_key=True, index=True)
    fino = Column(Integer, ForeignKey(f"{settings.INSTRUCTOR_TABLE}.fino"), nullable=False, index=True)
    content = Column(Text, nullable=False)
