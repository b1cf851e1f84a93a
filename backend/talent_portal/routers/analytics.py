"""Candidate risk analytics routes."""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User
from talent_portal.permissions import require_view
from talent_portal.schemas.portal import CandidateMetricOut, CandidateRiskOut
from talent_portal.services import analytics_service

router = APIRouter()


@router.get("/metrics", response_model=list[CandidateMetricOut])
def list_metrics(
    cohort_name: Optional[str] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("risk")),
):
    return analytics_service.list_metrics(db, cohort_name)


@router.post("/risk", response_model=list[CandidateRiskOut])
def analyze_risk(
    cohort_name: Optional[str] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("risk")),
):
    """Score candidates for drop-out risk. Scores are absent when the AI is unavailable."""
    return analytics_service.analyze_risk(db, cohort_name)
