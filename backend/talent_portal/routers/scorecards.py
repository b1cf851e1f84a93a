"""Score card routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User, Role
from talent_portal.permissions import require_view
from talent_portal.schemas.portal import ScoreCardCreate, ScoreCardOut
from talent_portal.services import portal_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ScoreCardOut, status_code=status.HTTP_201_CREATED)
def submit_scorecard(
    payload: ScoreCardCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("performance")),
):
    card = portal_service.submit_scorecard(db, actor, payload.model_dump())
    logger.info("Score card %s for %s submitted by %s", card.scorecard_id, card.candidate_id, actor.user_id)
    return card


@router.get("/", response_model=list[ScoreCardOut])
def list_scorecards(
    candidate_id: Optional[str] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("performance")),
):
    """Newest first. Candidates only ever see their own."""
    if actor.role == Role.candidate:
        candidate_id = actor.user_id
    return portal_service.list_scorecards(db, candidate_id)
