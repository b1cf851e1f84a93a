"""Announcement ORM model."""
import enum
import uuid
from sqlalchemy import Column, String, Text, Date, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from talent_portal.database import Base


class AnnouncementType(str, enum.Enum):
    general = "General"
    urgent = "Urgent"
    event = "Event"


class Announcement(Base):
    __tablename__ = "announcements"

    announcement_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    type = Column(SAEnum(AnnouncementType), nullable=False, default=AnnouncementType.general)
    target_cohort_id = Column(String(36), nullable=False, default="All")  # cohort id or "All"
    target_cohort_name = Column(String(150), nullable=True)
    image_url = Column(String(1000), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
