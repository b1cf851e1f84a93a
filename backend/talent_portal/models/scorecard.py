"""ScoreCard ORM model — weekly reviewer evaluation of a candidate."""
import uuid
from sqlalchemy import Column, String, Text, Date, Integer, DateTime
from sqlalchemy.sql import func
from talent_portal.database import Base


class ScoreCard(Base):
    __tablename__ = "scorecards"

    scorecard_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    candidate_id = Column(String(36), nullable=False, index=True)
    candidate_name = Column(String(100), nullable=False)
    reviewer_name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    week = Column(Integer, nullable=False)
    # 0-100 metrics
    attendance = Column(Integer, nullable=False)
    communication = Column(Integer, nullable=False)
    accountability = Column(Integer, nullable=False)
    creativity_ownership = Column(Integer, nullable=False)
    object_delivery = Column(Integer, nullable=False)
    tech_skills = Column(Integer, nullable=False)
    comments = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
