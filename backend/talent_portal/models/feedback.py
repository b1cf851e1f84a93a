"""FeedbackEntry ORM model — candidate voice plus the oracle's analysis."""
import enum
import uuid
from sqlalchemy import Column, String, Text, Date, DateTime, JSON, Enum as SAEnum
from sqlalchemy.sql import func
from talent_portal.database import Base


class FeedbackCategory(str, enum.Enum):
    course = "Course"
    test = "Test"
    project = "Project"
    general = "General"


class FeedbackEntry(Base):
    __tablename__ = "feedback"

    feedback_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    user_name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    category = Column(SAEnum(FeedbackCategory), nullable=False, default=FeedbackCategory.general)
    content = Column(Text, nullable=False)
    sentiment = Column(String(20), nullable=False)
    topics = Column(JSON, nullable=False, default=list)
    ai_summary = Column(Text, nullable=False, default="")
    urgency = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
