"""Request routes — submission, history and the approver workflow."""
import enum
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.errors import ValidationError, PermissionDeniedError
from talent_portal.models.request_kind import RequestKind, TicketStatus
from talent_portal.models.user import User
from talent_portal.permissions import require_view, can_access
from talent_portal.schemas.request import (
    LeaveRequestCreate, ITTicketCreate, ProfileUpdateCreate, ApprovalPayload, TicketStatusUpdate,
    LeaveRequestOut, ITTicketOut, ProfileUpdateOut, PendingProfileUpdateCheck, HistoryEntry, RequestOut,
)
from talent_portal.services import approval_service, history_service, submission_service

logger = logging.getLogger(__name__)
router = APIRouter()


class RequestResource(str, enum.Enum):
    """URL segment for each request collection, as used by the submission routes."""

    leave = "leave"
    it_tickets = "it-tickets"
    profile_updates = "profile-updates"


_RESOURCE_KINDS = {
    RequestResource.leave: RequestKind.leave,
    RequestResource.it_tickets: RequestKind.it_ticket,
    RequestResource.profile_updates: RequestKind.profile_update,
}

_OUT_SCHEMAS = {
    RequestKind.leave: LeaveRequestOut,
    RequestKind.it_ticket: ITTicketOut,
    RequestKind.profile_update: ProfileUpdateOut,
}


def to_out(record):
    """Serialise a request record with the schema matching its ``kind`` tag."""
    return _OUT_SCHEMAS[record.kind].model_validate(record)


def _check_self_or_approver(actor: User, user_id: str) -> None:
    if actor.user_id != user_id and not can_access(actor.role, "approvals"):
        raise PermissionDeniedError("You may only act on your own requests")


# ── Submission ─────────────────────────────────────────────────────
@router.post("/leave", response_model=LeaveRequestOut, status_code=status.HTTP_201_CREATED)
def submit_leave(
    payload: LeaveRequestCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("forms")),
):
    _check_self_or_approver(actor, payload.user_id)
    request = submission_service.submit_leave(
        db,
        user_id=payload.user_id,
        leave_type=payload.leave_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        reason=payload.reason,
    )
    logger.info("Leave request %s submitted by %s", request.request_id, payload.user_id)
    return request


@router.post("/it-tickets", response_model=ITTicketOut, status_code=status.HTTP_201_CREATED)
def submit_it_ticket(
    payload: ITTicketCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("forms")),
):
    _check_self_or_approver(actor, payload.user_id)
    ticket = submission_service.submit_it_ticket(
        db,
        user_id=payload.user_id,
        category=payload.category,
        description=payload.description,
        priority=payload.priority,
    )
    logger.info("IT ticket %s submitted by %s", ticket.request_id, payload.user_id)
    return ticket


@router.post("/profile-updates", response_model=ProfileUpdateOut, status_code=status.HTTP_201_CREATED)
def submit_profile_update(
    payload: ProfileUpdateCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("profile")),
):
    """Propose new phone/location/bio values. Only one may be pending per user."""
    _check_self_or_approver(actor, payload.user_id)
    request = submission_service.submit_profile_update(db, payload.user_id, payload.updates)
    logger.info("Profile update %s submitted by %s", request.request_id, payload.user_id)
    return request


@router.get("/profile-updates/pending-check/{user_id}", response_model=PendingProfileUpdateCheck)
def check_pending_profile_update(
    user_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("profile")),
):
    return PendingProfileUpdateCheck(
        user_id=user_id,
        has_pending=submission_service.has_pending_profile_update(db, user_id),
    )


# ── History ────────────────────────────────────────────────────────
@router.get("/history/{user_id}", response_model=list[HistoryEntry])
def owner_history(
    user_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("dashboard")),
):
    """Every leave request and IT ticket the user submitted, newest first."""
    _check_self_or_approver(actor, user_id)
    return [to_out(r) for r in history_service.owner_history(db, user_id)]


@router.get("/pending", response_model=list[HistoryEntry])
def pending_queue(
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("approvals")),
):
    """Pending leave requests and Open IT tickets, newest first."""
    return [to_out(r) for r in history_service.pending_queue(db)]


@router.get("/profile-updates/pending", response_model=list[ProfileUpdateOut])
def pending_profile_updates(
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("approvals")),
):
    return history_service.pending_profile_updates(db)


# ── Approver workflow ──────────────────────────────────────────────
@router.post("/it-tickets/{request_id}/status", response_model=ITTicketOut)
def set_ticket_status(
    request_id: str,
    payload: TicketStatusUpdate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("approvals")),
):
    try:
        new_status = TicketStatus(payload.status)
    except ValueError:
        raise ValidationError(f"Invalid ticket status '{payload.status}'")
    ticket = approval_service.set_ticket_status(db, request_id, new_status)
    logger.info("IT ticket %s set to %s by %s", request_id, new_status.value, actor.user_id)
    return ticket


@router.post("/{resource}/{request_id}/approve", response_model=RequestOut)
def approve_request(
    resource: RequestResource,
    request_id: str,
    payload: Optional[ApprovalPayload] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("approvals")),
):
    """Approve a request. Profile updates are applied to the user in the same transaction."""
    kind = _RESOURCE_KINDS[resource]
    applied_fields = payload.applied_fields if payload else None
    request = approval_service.approve(db, kind, request_id, applied_fields=applied_fields)
    logger.info("%s %s approved by %s", kind.value, request_id, actor.user_id)
    return to_out(request)


@router.post("/{resource}/{request_id}/reject", response_model=RequestOut)
def reject_request(
    resource: RequestResource,
    request_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("approvals")),
):
    kind = _RESOURCE_KINDS[resource]
    request = approval_service.reject(db, kind, request_id)
    logger.info("%s %s rejected by %s", kind.value, request_id, actor.user_id)
    return to_out(request)
