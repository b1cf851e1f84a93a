"""Dashboard routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User
from talent_portal.permissions import require_view
from talent_portal.services import dashboard_service

router = APIRouter()


@router.get("/stats", response_model=dict[str, str])
def dashboard_stats(
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("dashboard")),
):
    """Role-specific headline counters for the signed-in user."""
    return dashboard_service.stats_for(db, actor)
