"""Submission service — turns filled-in forms into Pending/Open request records.

Validation happens before any write: a ValidationError means nothing was
persisted. The one-pending-profile-update rule is a check-then-create and is
not transactional; two simultaneous submissions can both pass the check.
"""
import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session

from talent_portal.errors import ValidationError
from talent_portal.models.request_kind import RequestKind, ApprovalStatus, TicketPriority
from talent_portal.models.leave_request import LeaveRequest
from talent_portal.models.it_ticket import ITSupportTicket
from talent_portal.models.profile_update import ProfileUpdateRequest, EDITABLE_PROFILE_FIELDS
from talent_portal.services import record_store

logger = logging.getLogger(__name__)


def _required(value: Optional[str], label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} is required")
    return cleaned


def has_pending_profile_update(db: Session, user_id: str) -> bool:
    """Whether the user already has a profile update awaiting approval."""
    pending = record_store.list_where(
        db, RequestKind.profile_update, user_id=user_id, status=ApprovalStatus.pending
    )
    return len(pending) > 0


def submit_leave(
    db: Session,
    user_id: str,
    leave_type: str,
    start_date: date,
    end_date: date,
    reason: str,
) -> LeaveRequest:
    leave_type = _required(leave_type, "Leave type")
    reason = _required(reason, "Reason")
    if start_date > end_date:
        raise ValidationError("Start date must be on or before end date")

    user = record_store.get(db, "users", user_id)
    return record_store.create(db, RequestKind.leave, {
        "user_id": user.user_id,
        "user_name": user.display_name,
        "leave_type": leave_type,
        "start_date": start_date,
        "end_date": end_date,
        "dates": f"{start_date.isoformat()} to {end_date.isoformat()}",
        "reason": reason,
    })


def submit_it_ticket(
    db: Session,
    user_id: str,
    category: str,
    description: str,
    priority: str = TicketPriority.low.value,
) -> ITSupportTicket:
    description = _required(description, "Description")
    category = _required(category, "Category")
    try:
        ticket_priority = TicketPriority(priority)
    except ValueError:
        allowed = ", ".join(p.value for p in TicketPriority)
        raise ValidationError(f"Invalid priority '{priority}'. Expected one of: {allowed}")

    user = record_store.get(db, "users", user_id)
    return record_store.create(db, RequestKind.it_ticket, {
        "user_id": user.user_id,
        "user_name": user.display_name,
        "category": category,
        "priority": ticket_priority,
        "description": description,
    })


def clean_profile_fields(fields: dict[str, Any]) -> dict[str, str]:
    """Reject non-editable keys and drop blank values."""
    illegal = sorted(set(fields) - set(EDITABLE_PROFILE_FIELDS))
    if illegal:
        raise ValidationError(f"Profile updates may not change: {', '.join(illegal)}")
    return {
        key: value.strip()
        for key, value in fields.items()
        if isinstance(value, str) and value.strip()
    }


def submit_profile_update(db: Session, user_id: str, updates: dict[str, Any]) -> ProfileUpdateRequest:
    proposed = clean_profile_fields(updates)
    if not proposed:
        raise ValidationError("At least one of phone, location or bio must be provided")

    user = record_store.get(db, "users", user_id)
    if has_pending_profile_update(db, user.user_id):
        raise ValidationError("A pending profile update already exists for this user")

    return record_store.create(db, RequestKind.profile_update, {
        "user_id": user.user_id,
        "user_name": user.display_name,
        "updates": proposed,
    })
