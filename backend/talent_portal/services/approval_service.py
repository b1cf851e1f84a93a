"""Approval service — approver-side status transitions.

Leave and profile-update requests end Approved or Rejected; IT tickets move
Open -> In Progress -> Resolved and are never rejected. Approving a profile
update also copies the proposed fields onto the User, in the same
transaction as the status write.
"""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from talent_portal.errors import PortalError, ValidationError, InvalidTransitionError
from talent_portal.models.request_kind import RequestKind, ApprovalStatus, TicketStatus
from talent_portal.models.it_ticket import ITSupportTicket
from talent_portal.services import record_store
from talent_portal.services.submission_service import clean_profile_fields

logger = logging.getLogger(__name__)

TICKET_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.open: frozenset({TicketStatus.in_progress, TicketStatus.resolved}),
    TicketStatus.in_progress: frozenset({TicketStatus.resolved}),
    TicketStatus.resolved: frozenset(),
}


def approve(
    db: Session,
    kind: RequestKind,
    request_id: str,
    applied_fields: Optional[dict[str, Any]] = None,
):
    """Move a request to its success terminal status."""
    if kind == RequestKind.it_ticket:
        return set_ticket_status(db, request_id, TicketStatus.resolved)
    if kind == RequestKind.profile_update:
        return _approve_profile_update(db, request_id, applied_fields)
    return record_store.update_status(
        db, kind, request_id, ApprovalStatus.approved, expected_status=ApprovalStatus.pending
    )


def reject(db: Session, kind: RequestKind, request_id: str):
    """Move a leave or profile-update request to Rejected. Rejected updates never touch the User."""
    if kind == RequestKind.it_ticket:
        raise InvalidTransitionError("IT tickets cannot be rejected; resolve the ticket instead")
    return record_store.update_status(
        db, kind, request_id, ApprovalStatus.rejected, expected_status=ApprovalStatus.pending
    )


def set_ticket_status(db: Session, request_id: str, new_status: TicketStatus) -> ITSupportTicket:
    ticket = record_store.get(db, RequestKind.it_ticket, request_id)
    if new_status not in TICKET_TRANSITIONS[ticket.status]:
        raise InvalidTransitionError(
            f"IT ticket {request_id} cannot move from {ticket.status.value} to {new_status.value}"
        )
    return record_store.update_status(
        db, RequestKind.it_ticket, request_id, new_status, expected_status=ticket.status
    )


def _approve_profile_update(db: Session, request_id: str, applied_fields: Optional[dict[str, Any]]):
    request = record_store.get(db, RequestKind.profile_update, request_id)
    if request.status != ApprovalStatus.pending:
        raise InvalidTransitionError(f"Profile update {request_id} is already {request.status.value}")

    fields = clean_profile_fields(applied_fields) if applied_fields is not None else dict(request.updates)
    if not fields:
        raise ValidationError("Nothing to apply: no profile fields given")

    user_id = request.user_id
    try:
        record_store.update_fields(db, "users", user_id, fields, commit=False)
        request = record_store.update_status(
            db,
            RequestKind.profile_update,
            request_id,
            ApprovalStatus.approved,
            expected_status=ApprovalStatus.pending,
            commit=False,
        )
        with record_store.persisting(db, "commit profile update approval"):
            db.commit()
    except PortalError:
        db.rollback()
        logger.warning("Profile update %s approval rolled back; user %s unchanged", request_id, user_id)
        raise

    logger.info("Applied profile update %s to user %s: %s", request_id, user_id, sorted(fields))
    return request
