"""ProfileUpdateRequest ORM model — proposed self-service profile edits."""
import uuid
from sqlalchemy import Column, String, Date, Integer, DateTime, JSON, Enum as SAEnum
from sqlalchemy.sql import func
from talent_portal.database import Base
from talent_portal.models.request_kind import RequestKind, ApprovalStatus

# Only these User fields may be proposed; role and email never.
EDITABLE_PROFILE_FIELDS = ("phone", "location", "bio")


class ProfileUpdateRequest(Base):
    __tablename__ = "profile_updates"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    kind = Column(SAEnum(RequestKind), nullable=False, default=RequestKind.profile_update)
    user_id = Column(String(36), nullable=False, index=True)
    user_name = Column(String(100), nullable=False)
    updates = Column(JSON, nullable=False)
    status = Column(SAEnum(ApprovalStatus), nullable=False, default=ApprovalStatus.pending, index=True)
    submitted_date = Column(Date, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
