"""Cohort routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User
from talent_portal.permissions import require_view
from talent_portal.schemas.portal import CohortCreate, CohortOut
from talent_portal.schemas.user import UserOut
from talent_portal.services import portal_service, record_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=CohortOut, status_code=status.HTTP_201_CREATED)
def create_cohort(
    payload: CohortCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("admin")),
):
    cohort = portal_service.create_cohort(db, **payload.model_dump())
    logger.info("Cohort %s (%s) created by %s", cohort.cohort_id, cohort.name, actor.user_id)
    return cohort


@router.get("/", response_model=list[CohortOut])
def list_cohorts(
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("cohorts")),
):
    return record_store.list_where(db, "cohorts", order_by="start_date")


@router.get("/{cohort_id}", response_model=CohortOut)
def get_cohort(
    cohort_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("cohorts")),
):
    return record_store.get(db, "cohorts", cohort_id)


@router.get("/{cohort_id}/candidates", response_model=list[UserOut])
def cohort_roster(
    cohort_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("cohorts")),
):
    """Candidates enrolled in the cohort."""
    return portal_service.cohort_roster(db, cohort_id)
