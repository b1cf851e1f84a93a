"""CandidateMetric ORM model — one row per candidate, keyed by user id."""
from sqlalchemy import Column, String, Integer
from talent_portal.database import Base


class CandidateMetric(Base):
    __tablename__ = "candidate_metrics"

    user_id = Column(String(36), primary_key=True)
    name = Column(String(100), nullable=False)
    cohort_name = Column(String(150), nullable=True)
    sponsor = Column(String(150), nullable=True)
    technical_score = Column(Integer, nullable=False, default=0)
    soft_skill_score = Column(Integer, nullable=False, default=0)
    attendance = Column(Integer, nullable=False, default=0)
    projects_completed = Column(Integer, nullable=False, default=0)
