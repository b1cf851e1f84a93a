"""Record store — typed persistence over the portal's flat collections.

Every collection follows the same shape: create, get, list (optionally by
field equality), delete, and for request kinds a guarded status write.
Status writes are compare-and-swap on ``(status, version)`` so two approvers
racing on the same record cannot both succeed.
"""
import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

import pytz
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talent_portal.config import settings
from talent_portal.errors import NotFoundError, PersistenceError, InvalidTransitionError
from talent_portal.models.request_kind import RequestKind, ApprovalStatus, TicketStatus
from talent_portal.models.leave_request import LeaveRequest
from talent_portal.models.it_ticket import ITSupportTicket
from talent_portal.models.profile_update import ProfileUpdateRequest
from talent_portal.models.user import User
from talent_portal.models.cohort import Cohort
from talent_portal.models.announcement import Announcement
from talent_portal.models.scorecard import ScoreCard
from talent_portal.models.certificate import VerifiedCertificate
from talent_portal.models.feedback import FeedbackEntry
from talent_portal.models.candidate_metric import CandidateMetric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collection:
    name: str
    model: type
    id_field: str
    owner_field: Optional[str] = None
    kind: Optional[RequestKind] = None
    initial_status: Optional[enum.Enum] = None


COLLECTIONS: dict[str, Collection] = {
    c.name: c
    for c in (
        Collection("leave_requests", LeaveRequest, "request_id", "user_id",
                   RequestKind.leave, ApprovalStatus.pending),
        Collection("it_tickets", ITSupportTicket, "request_id", "user_id",
                   RequestKind.it_ticket, TicketStatus.open),
        Collection("profile_updates", ProfileUpdateRequest, "request_id", "user_id",
                   RequestKind.profile_update, ApprovalStatus.pending),
        Collection("users", User, "user_id"),
        Collection("cohorts", Cohort, "cohort_id"),
        Collection("announcements", Announcement, "announcement_id"),
        Collection("scorecards", ScoreCard, "scorecard_id", "candidate_id"),
        Collection("verified_certificates", VerifiedCertificate, "certificate_id", "user_id"),
        Collection("feedback", FeedbackEntry, "feedback_id", "user_id"),
        Collection("candidate_metrics", CandidateMetric, "user_id", "user_id"),
    )
}

REQUEST_COLLECTIONS: dict[RequestKind, str] = {
    RequestKind.leave: "leave_requests",
    RequestKind.it_ticket: "it_tickets",
    RequestKind.profile_update: "profile_updates",
}

CollectionRef = Union[str, RequestKind]


def resolve(kind: CollectionRef) -> Collection:
    """Map a request kind or collection name to its Collection entry."""
    name = REQUEST_COLLECTIONS[kind] if isinstance(kind, RequestKind) else kind
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown collection: {kind}")


def portal_today() -> date:
    """Today's calendar date in the portal's configured timezone."""
    return datetime.now(pytz.timezone(settings.PORTAL_TIMEZONE)).date()


@contextmanager
def persisting(db: Session, action: str):
    """Roll back and re-raise store failures as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Store failure during %s: %s", action, e)
        raise PersistenceError(f"Could not {action}: {e.__class__.__name__}") from e


def _finish(db: Session, commit: bool) -> None:
    if commit:
        db.commit()
    else:
        db.flush()


def create(db: Session, kind: CollectionRef, payload: dict[str, Any], commit: bool = True):
    """Insert a new record. Request kinds get their kind tag, initial status and today's date."""
    coll = resolve(kind)
    record = coll.model(**payload)
    if coll.kind is not None:
        record.kind = coll.kind
        record.status = coll.initial_status
        record.submitted_date = portal_today()
        record.version = 1

    with persisting(db, f"create {coll.name} record"):
        db.add(record)
        _finish(db, commit)
        db.refresh(record)
    logger.info("Created %s record %s", coll.name, getattr(record, coll.id_field))
    return record


def find(db: Session, kind: CollectionRef, record_id: str):
    """Fetch a record by id, or None."""
    coll = resolve(kind)
    with persisting(db, f"read {coll.name} record"):
        return db.query(coll.model).filter(getattr(coll.model, coll.id_field) == record_id).first()


def get(db: Session, kind: CollectionRef, record_id: str):
    """Fetch a record by id; NotFoundError if absent."""
    record = find(db, kind, record_id)
    if record is None:
        raise NotFoundError(f"{resolve(kind).name} record {record_id} not found")
    return record


def list_where(db: Session, kind: CollectionRef, order_by: Optional[str] = None, **filters: Any) -> list:
    """All records whose fields equal the given values (all records when no filters)."""
    coll = resolve(kind)
    with persisting(db, f"query {coll.name}"):
        query = db.query(coll.model).filter_by(**filters)
        if order_by:
            query = query.order_by(getattr(coll.model, order_by).desc())
        return query.all()


def list_all(db: Session, kind: CollectionRef) -> list:
    return list_where(db, kind)


def list_by_status(db: Session, kind: RequestKind, status: enum.Enum) -> list:
    return list_where(db, kind, status=status)


def list_by_owner(db: Session, kind: CollectionRef, owner_id: str) -> list:
    coll = resolve(kind)
    return list_where(db, kind, **{coll.owner_field: owner_id})


def update_fields(db: Session, kind: CollectionRef, record_id: str, fields: dict[str, Any], commit: bool = True):
    """Overwrite the given fields on an existing record; the id never changes."""
    coll = resolve(kind)
    record = get(db, kind, record_id)
    with persisting(db, f"update {coll.name} record"):
        for field, value in fields.items():
            if field == coll.id_field:
                continue
            setattr(record, field, value)
        _finish(db, commit)
        db.refresh(record)
    logger.info("Updated %s record %s (%s)", coll.name, record_id, ", ".join(sorted(fields)))
    return record


def delete(db: Session, kind: CollectionRef, record_id: str, commit: bool = True) -> None:
    coll = resolve(kind)
    record = get(db, kind, record_id)
    with persisting(db, f"delete {coll.name} record"):
        db.delete(record)
        _finish(db, commit)
    logger.info("Deleted %s record %s", coll.name, record_id)


def update_status(
    db: Session,
    kind: RequestKind,
    record_id: str,
    new_status: enum.Enum,
    expected_status: enum.Enum,
    commit: bool = True,
):
    """Move a request from ``expected_status`` to ``new_status``.

    The write only lands if neither status nor version changed since the
    record was read; otherwise InvalidTransitionError is raised and nothing
    is written.
    """
    coll = resolve(kind)
    record = get(db, kind, record_id)
    if record.status != expected_status:
        raise InvalidTransitionError(
            f"{coll.name} record {record_id} is {record.status.value}, expected {expected_status.value}"
        )

    model = coll.model
    stmt = (
        update(model)
        .where(
            getattr(model, coll.id_field) == record_id,
            model.status == expected_status,
            model.version == record.version,
        )
        .values(status=new_status, version=model.version + 1)
        .execution_options(synchronize_session=False)
    )
    with persisting(db, f"update {coll.name} status"):
        result = db.execute(stmt)
        if result.rowcount != 1:
            db.rollback()
            raise InvalidTransitionError(
                f"{coll.name} record {record_id} was modified concurrently. Re-fetch and retry."
            )
        _finish(db, commit)
        db.refresh(record)

    logger.info(
        "%s record %s: %s -> %s (version %d)",
        coll.name, record_id, expected_status.value, new_status.value, record.version,
    )
    return record
