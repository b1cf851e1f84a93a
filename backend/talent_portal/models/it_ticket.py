"""ITSupportTicket ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Date, Integer, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from talent_portal.database import Base
from talent_portal.models.request_kind import RequestKind, TicketStatus, TicketPriority


class ITSupportTicket(Base):
    __tablename__ = "it_tickets"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    kind = Column(SAEnum(RequestKind), nullable=False, default=RequestKind.it_ticket)
    user_id = Column(String(36), nullable=False, index=True)
    user_name = Column(String(100), nullable=False)
    category = Column(String(100), nullable=False)
    priority = Column(SAEnum(TicketPriority), nullable=False, default=TicketPriority.low)
    description = Column(Text, nullable=False)
    status = Column(SAEnum(TicketStatus), nullable=False, default=TicketStatus.open, index=True)
    submitted_date = Column(Date, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
