"""Directory and user administration routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User, Role
from talent_portal.permissions import require_view
from talent_portal.schemas.user import UserUpdate, UserOut
from talent_portal.services import account_service, record_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[UserOut])
def list_users(
    role: Optional[Role] = None,
    cohort_id: Optional[str] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("directory")),
):
    """List users, optionally filtered by role or cohort."""
    return account_service.list_users(db, role=role, cohort_id=cohort_id)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("directory")),
):
    return record_store.get(db, "users", user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("admin")),
):
    """Admin edit (partial update)."""
    user = account_service.update_user(db, user_id, payload.model_dump(exclude_unset=True))
    logger.info("User %s updated by %s", user_id, actor.user_id)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("admin")),
):
    """Hard delete. Historical requests stay behind."""
    account_service.delete_user(db, user_id)
    logger.info("User %s deleted by %s", user_id, actor.user_id)
