"""LeaveRequest ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Date, Integer, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from talent_portal.database import Base
from talent_portal.models.request_kind import RequestKind, ApprovalStatus


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    kind = Column(SAEnum(RequestKind), nullable=False, default=RequestKind.leave)
    user_id = Column(String(36), nullable=False, index=True)  # no FK: history survives user deletion
    user_name = Column(String(100), nullable=False)
    leave_type = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    dates = Column(String(50), nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(SAEnum(ApprovalStatus), nullable=False, default=ApprovalStatus.pending, index=True)
    submitted_date = Column(Date, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
