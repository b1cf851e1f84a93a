"""Role-specific dashboard counters."""
from sqlalchemy.orm import Session

from talent_portal.models.request_kind import RequestKind, ApprovalStatus, TicketStatus
from talent_portal.models.user import User, Role
from talent_portal.services import record_store

ACCRUED_LEAVE_PER_MONTH = "1.25 Days"
TECH_FLAG_THRESHOLD = 60
ATTENDANCE_FLAG_THRESHOLD = 80


def _average(values: list[int]) -> int:
    return round(sum(values) / len(values)) if values else 0


def candidate_stats(db: Session, user: User) -> dict[str, str]:
    pending_leave = record_store.list_where(
        db, RequestKind.leave, user_id=user.user_id, status=ApprovalStatus.pending
    )
    open_tickets = record_store.list_where(
        db, RequestKind.it_ticket, user_id=user.user_id, status=TicketStatus.open
    )
    verified = record_store.list_where(
        db, "verified_certificates", user_id=user.user_id, verification_status="VERIFIED"
    )
    cards = record_store.list_by_owner(db, "scorecards", user.user_id)
    return {
        "accrued_leave": ACCRUED_LEAVE_PER_MONTH,
        "pending_requests": f"{len(pending_leave) + len(open_tickets)} Pending",
        "verified_certificates": f"{len(verified)} Verified",
        "average_performance": f"{_average([c.tech_skills for c in cards])}% Avg",
    }


def staff_stats(db: Session) -> dict[str, str]:
    candidates = record_store.list_where(db, "users", role=Role.candidate)
    cards = record_store.list_all(db, "scorecards")
    flagged = [
        c for c in cards
        if c.tech_skills < TECH_FLAG_THRESHOLD or c.attendance < ATTENDANCE_FLAG_THRESHOLD
    ]
    return {
        "total_candidates": f"{len(candidates)} Total",
        "flags": f"{len(flagged)} Flags",
        "average_attendance": f"{_average([c.attendance for c in cards])}% Avg",
        "reviews": f"{len(cards)} Reviews",
    }


def stats_for(db: Session, user: User) -> dict[str, str]:
    if user.role == Role.candidate:
        return candidate_stats(db, user)
    return staff_stats(db)
