"""User ORM model — portal account and profile."""
import enum
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from talent_portal.database import Base


class Role(str, enum.Enum):
    candidate = "Candidate/Employee"
    tech_champion = "Tech Champion"
    manager = "Manager"
    admin = "Admin/HR"


class UserStatus(str, enum.Enum):
    active = "Active"
    inactive = "Inactive"


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    display_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False, default="")
    role = Column(SAEnum(Role), nullable=False, default=Role.candidate)
    phone = Column(String(50), nullable=True)
    department = Column(String(100), nullable=False, default="General")
    status = Column(SAEnum(UserStatus), nullable=False, default=UserStatus.active)
    cohort_id = Column(String(36), ForeignKey("cohorts.cohort_id"), nullable=True)
    location = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    avatar = Column(String(500), nullable=False, default="")
    last_active = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
