"""Cohorts, announcements and score cards."""
import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session

from talent_portal.errors import ValidationError, PermissionDeniedError
from talent_portal.models.announcement import Announcement
from talent_portal.models.cohort import Cohort
from talent_portal.models.scorecard import ScoreCard
from talent_portal.models.user import User, Role
from talent_portal.services import record_store

logger = logging.getLogger(__name__)

ALL_COHORTS = "All"
SCORE_FIELDS = (
    "attendance", "communication", "accountability",
    "creativity_ownership", "object_delivery", "tech_skills",
)


def create_cohort(db: Session, name: str, program: str, start_date: date,
                  sponsor: Optional[str] = None, size: int = 0) -> Cohort:
    name = (name or "").strip()
    program = (program or "").strip()
    if not name or not program:
        raise ValidationError("Cohort name and program are required")
    return record_store.create(db, "cohorts", {
        "name": name,
        "program": program,
        "sponsor": sponsor,
        "start_date": start_date,
        "size": size,
    })


def cohort_roster(db: Session, cohort_id: str) -> list[User]:
    record_store.get(db, "cohorts", cohort_id)
    return record_store.list_where(db, "users", cohort_id=cohort_id, role=Role.candidate)


def publish_announcement(db: Session, fields: dict[str, Any]) -> Announcement:
    """Broadcast to one cohort or to ``All``; the cohort name is denormalised onto the record."""
    if not (fields.get("title") or "").strip() or not (fields.get("content") or "").strip():
        raise ValidationError("Announcements need a title and content")
    target = fields.get("target_cohort_id") or ALL_COHORTS
    target_name = "All Cohorts"
    if target != ALL_COHORTS:
        target_name = record_store.get(db, "cohorts", target).name
    return record_store.create(db, "announcements", {
        **fields,
        "target_cohort_id": target,
        "target_cohort_name": target_name,
        "date": record_store.portal_today(),
    })


def list_announcements(db: Session, cohort_id: Optional[str] = None) -> list[Announcement]:
    """Newest first. With a cohort, only broadcasts to that cohort or to everyone."""
    announcements = record_store.list_where(db, "announcements", order_by="date")
    if cohort_id is None:
        return announcements
    return [a for a in announcements if a.target_cohort_id in (ALL_COHORTS, cohort_id)]


def submit_scorecard(db: Session, reviewer: User, fields: dict[str, Any]) -> ScoreCard:
    if reviewer.role == Role.candidate:
        raise PermissionDeniedError("Candidates cannot submit score cards")
    for name in SCORE_FIELDS:
        if not 0 <= fields[name] <= 100:
            raise ValidationError(f"{name} must be between 0 and 100")
    candidate = record_store.get(db, "users", fields["candidate_id"])
    if candidate.role != Role.candidate:
        raise ValidationError(f"User {candidate.user_id} is not a candidate")
    return record_store.create(db, "scorecards", {
        **fields,
        "candidate_name": candidate.display_name,
        "reviewer_name": reviewer.display_name,
        "date": record_store.portal_today(),
    })


def list_scorecards(db: Session, candidate_id: Optional[str] = None) -> list[ScoreCard]:
    filters = {"candidate_id": candidate_id} if candidate_id else {}
    return record_store.list_where(db, "scorecards", order_by="date", **filters)
