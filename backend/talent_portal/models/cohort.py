"""Cohort ORM model — a sponsored training intake."""
import uuid
from sqlalchemy import Column, String, Date, Integer, DateTime
from sqlalchemy.sql import func
from talent_portal.database import Base


class Cohort(Base):
    __tablename__ = "cohorts"

    cohort_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    program = Column(String(150), nullable=False)
    sponsor = Column(String(150), nullable=True)
    start_date = Column(Date, nullable=False)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
