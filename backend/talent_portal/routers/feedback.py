"""Candidate feedback routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User, Role
from talent_portal.permissions import require_view
from talent_portal.schemas.portal import FeedbackCreate, FeedbackOut
from talent_portal.services import feedback_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("feedback")),
):
    """Store feedback with its AI sentiment analysis (fallback analysis if the AI is down)."""
    entry = feedback_service.submit_feedback(db, actor.user_id, payload.category, payload.content)
    logger.info("Feedback %s from %s: %s/%s", entry.feedback_id, actor.user_id, entry.sentiment, entry.urgency)
    return entry


@router.get("/", response_model=list[FeedbackOut])
def list_feedback(
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("feedback")),
):
    if actor.role == Role.candidate:
        return feedback_service.list_feedback(db, user_id=actor.user_id)
    return feedback_service.list_feedback(db)
