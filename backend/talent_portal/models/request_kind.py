"""Shared enums for the request/approval workflow."""
import enum


class RequestKind(str, enum.Enum):
    leave = "leave"
    it_ticket = "it_ticket"
    profile_update = "profile_update"


class ApprovalStatus(str, enum.Enum):
    """Leave and profile-update lifecycle."""

    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


class TicketStatus(str, enum.Enum):
    open = "Open"
    in_progress = "In Progress"
    resolved = "Resolved"


class TicketPriority(str, enum.Enum):
    low = "Low"
    medium = "Medium"
    high = "High"
    critical = "Critical"
