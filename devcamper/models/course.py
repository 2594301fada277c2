from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from devcamper.database.session import Base

SKILLS = ("beginner", "intermediate", "advanced")


class Course(Base):
    __tablename__ = "Courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(120), nullable=False)
    description = Column(String(1000), nullable=False)
    weeks = Column(Integer, nullable=False)
    tuition = Column(Float, nullable=False)
    minimum_skill = Column(String(15), nullable=False)
    scholarship_available = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # foreign keys
    bootcamp_id = Column(Integer, ForeignKey("Bootcamps.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("Users.id"), nullable=False)

    bootcamp = relationship("Bootcamp", lazy="joined")
