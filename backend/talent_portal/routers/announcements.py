"""Announcement (broadcast) routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User, Role
from talent_portal.permissions import require_view
from talent_portal.schemas.portal import AnnouncementCreate, AnnouncementOut
from talent_portal.services import portal_service, record_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=AnnouncementOut, status_code=status.HTTP_201_CREATED)
def publish_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("announcements")),
):
    announcement = portal_service.publish_announcement(db, payload.model_dump())
    logger.info(
        "Announcement %s published to %s by %s",
        announcement.announcement_id, announcement.target_cohort_id, actor.user_id,
    )
    return announcement


@router.get("/", response_model=list[AnnouncementOut])
def list_announcements(
    cohort_id: Optional[str] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("dashboard")),
):
    """Newest first. Candidates only ever see broadcasts for their own cohort and for everyone."""
    if actor.role == Role.candidate:
        return portal_service.list_announcements(db, actor.cohort_id or "")
    if cohort_id is None:
        return portal_service.list_announcements(db)
    return portal_service.list_announcements(db, cohort_id)


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(
    announcement_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("announcements")),
):
    record_store.delete(db, "announcements", announcement_id)
