"""Sign-in and account provisioning routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User
from talent_portal.permissions import require_view
from talent_portal.schemas.user import AccountCreate, SignIn, UserOut
from talent_portal.services import account_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/sign-in", response_model=UserOut)
def sign_in(payload: SignIn, db: Session = Depends(get_db)):
    """Check credentials and return the profile. The caller keeps the user id for later requests."""
    user = account_service.sign_in(db, payload.email, payload.password)
    logger.info("User %s signed in", user.user_id)
    return user


@router.post("/accounts", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("admin")),
):
    """Provision a new portal account (Admin/HR only)."""
    profile = payload.model_dump(exclude={"email", "password"})
    user = account_service.create_account(db, payload.email, payload.password, profile)
    logger.info("Account %s provisioned by %s", user.user_id, actor.user_id)
    return user
