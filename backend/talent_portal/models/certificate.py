"""VerifiedCertificate ORM model — only VERIFIED oracle results are stored."""
import uuid
from sqlalchemy import Column, String, Text, Float, DateTime
from sqlalchemy.sql import func
from talent_portal.database import Base


class VerifiedCertificate(Base):
    __tablename__ = "verified_certificates"

    certificate_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    candidate_name = Column(String(255), nullable=True)
    course_name = Column(String(255), nullable=True)
    issue_date = Column(String(50), nullable=True)
    issuer = Column(String(255), nullable=True)
    verification_status = Column(String(20), nullable=False)
    confidence_score = Column(Float, nullable=False, default=0.0)
    reason = Column(Text, nullable=True)
    verified_at = Column(DateTime(timezone=True), server_default=func.now())
