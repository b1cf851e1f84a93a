"""Pydantic schemas for leave requests, IT tickets and profile updates."""
from datetime import date
from typing import Optional, Union
from pydantic import BaseModel


class LeaveRequestCreate(BaseModel):
    user_id: str
    leave_type: str
    start_date: date
    end_date: date
    reason: str


class ITTicketCreate(BaseModel):
    user_id: str
    category: str
    priority: str = "Low"
    description: str


class ProfileUpdateCreate(BaseModel):
    user_id: str
    updates: dict[str, Optional[str]]


class ApprovalPayload(BaseModel):
    # profile updates only; defaults to the request's own proposed fields
    applied_fields: Optional[dict[str, Optional[str]]] = None


class TicketStatusUpdate(BaseModel):
    status: str  # In Progress, Resolved


class LeaveRequestOut(BaseModel):
    request_id: str
    kind: str
    user_id: str
    user_name: str
    leave_type: str
    start_date: date
    end_date: date
    dates: str
    reason: str
    status: str
    submitted_date: date
    version: int

    model_config = {"from_attributes": True}


class ITTicketOut(BaseModel):
    request_id: str
    kind: str
    user_id: str
    user_name: str
    category: str
    priority: str
    description: str
    status: str
    submitted_date: date
    version: int

    model_config = {"from_attributes": True}


class ProfileUpdateOut(BaseModel):
    request_id: str
    kind: str
    user_id: str
    user_name: str
    updates: dict[str, str]
    status: str
    submitted_date: date
    version: int

    model_config = {"from_attributes": True}


class PendingProfileUpdateCheck(BaseModel):
    user_id: str
    has_pending: bool


HistoryEntry = Union[LeaveRequestOut, ITTicketOut]
RequestOut = Union[LeaveRequestOut, ITTicketOut, ProfileUpdateOut]
