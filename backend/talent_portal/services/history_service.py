"""History aggregator — one newest-first feed over leave requests and IT tickets.

Each collection is queried independently and merged here. Records carry an
explicit ``kind`` tag so callers never have to guess which collection an
entry came from. Submission dates have day granularity; entries on the same
day keep their query order.
"""
from typing import Union

from sqlalchemy.orm import Session

from talent_portal.models.request_kind import RequestKind, ApprovalStatus, TicketStatus
from talent_portal.models.leave_request import LeaveRequest
from talent_portal.models.it_ticket import ITSupportTicket
from talent_portal.models.profile_update import ProfileUpdateRequest
from talent_portal.services import record_store

HistoryRecord = Union[LeaveRequest, ITSupportTicket]


def _newest_first(records: list[HistoryRecord]) -> list[HistoryRecord]:
    return sorted(records, key=lambda r: r.submitted_date, reverse=True)


def owner_history(db: Session, owner_id: str) -> list[HistoryRecord]:
    """Every leave request and IT ticket submitted by ``owner_id``, any status."""
    leaves = record_store.list_by_owner(db, RequestKind.leave, owner_id)
    tickets = record_store.list_by_owner(db, RequestKind.it_ticket, owner_id)
    return _newest_first(leaves + tickets)


def pending_queue(db: Session) -> list[HistoryRecord]:
    """The approver queue: Pending leave requests plus Open IT tickets."""
    leaves = record_store.list_by_status(db, RequestKind.leave, ApprovalStatus.pending)
    tickets = record_store.list_by_status(db, RequestKind.it_ticket, TicketStatus.open)
    return _newest_first(leaves + tickets)


def pending_profile_updates(db: Session) -> list[ProfileUpdateRequest]:
    updates = record_store.list_by_status(db, RequestKind.profile_update, ApprovalStatus.pending)
    return sorted(updates, key=lambda r: r.submitted_date, reverse=True)
