"""Pydantic schemas for Users and accounts."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from talent_portal.models.user import Role, UserStatus


class AccountCreate(BaseModel):
    email: str
    password: str
    display_name: str
    role: Role = Role.candidate
    phone: Optional[str] = None
    department: Optional[str] = None
    cohort_id: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None


class SignIn(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    """Admin edit — email and password are not editable here."""

    display_name: Optional[str] = None
    role: Optional[Role] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    status: Optional[UserStatus] = None
    cohort_id: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None


class UserOut(BaseModel):
    user_id: str
    display_name: str
    email: str
    role: str
    phone: Optional[str] = None
    department: str
    status: str
    cohort_id: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar: str
    last_active: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}
