"""Account service — provisioning, sign-in, admin edits and hard deletes.

Passwords are stored as bcrypt hashes. After sign-in the returned id and role
are trusted as-is by every other endpoint.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import bcrypt
from sqlalchemy.orm import Session

from talent_portal.config import settings
from talent_portal.errors import AuthError, ValidationError
from talent_portal.models.user import User, Role, UserStatus
from talent_portal.services import record_store

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8")[:72], hashed_password.encode("utf-8"))


def _normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    if "@" not in email:
        raise ValidationError("A valid email address is required")
    return email


def create_account(db: Session, email: str, password: str, profile: dict[str, Any]) -> User:
    """Provision a user. Candidates also get a zeroed candidate-metrics row."""
    email = _normalize_email(email)
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    display_name = (profile.get("display_name") or "").strip()
    if not display_name:
        raise ValidationError("Display name is required")
    if record_store.list_where(db, "users", email=email):
        raise ValidationError(f"An account already exists for {email}")

    cohort = None
    if profile.get("cohort_id"):
        cohort = record_store.get(db, "cohorts", profile["cohort_id"])

    fields = {k: v for k, v in profile.items() if v is not None}
    fields.update(
        display_name=display_name,
        email=email,
        password_hash=hash_password(password),
        status=UserStatus.active,
    )
    user = record_store.create(db, "users", fields, commit=False)

    if user.role == Role.candidate:
        record_store.create(db, "candidate_metrics", {
            "user_id": user.user_id,
            "name": user.display_name,
            "cohort_name": cohort.name if cohort else "Unassigned",
            "sponsor": cohort.sponsor if cohort else None,
        }, commit=False)

    with record_store.persisting(db, "provision account"):
        db.commit()
        db.refresh(user)
    logger.info("Provisioned %s account %s (%s)", user.role.value, user.user_id, email)
    return user


def sign_in(db: Session, email: str, password: str) -> User:
    matches = record_store.list_where(db, "users", email=(email or "").strip().lower())
    user = matches[0] if matches else None
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed sign-in for %s", email)
        raise AuthError("Invalid email or password")
    if user.status != UserStatus.active:
        raise AuthError("This account is inactive")
    return record_store.update_fields(db, "users", user.user_id, {"last_active": datetime.now(timezone.utc)})


def list_users(db: Session, role: Optional[Role] = None, cohort_id: Optional[str] = None) -> list[User]:
    filters: dict[str, Any] = {}
    if role is not None:
        filters["role"] = role
    if cohort_id is not None:
        filters["cohort_id"] = cohort_id
    return record_store.list_where(db, "users", **filters)


def update_user(db: Session, user_id: str, fields: dict[str, Any]) -> User:
    """Admin edit. Cohort links are checked; everything else is written as given."""
    if fields.get("cohort_id"):
        record_store.get(db, "cohorts", fields["cohort_id"])
    return record_store.update_fields(db, "users", user_id, fields)


def delete_user(db: Session, user_id: str) -> None:
    """Hard delete, together with the metrics row. The user's past requests are left in place."""
    record_store.delete(db, "users", user_id, commit=False)
    if record_store.find(db, "candidate_metrics", user_id) is not None:
        record_store.delete(db, "candidate_metrics", user_id, commit=False)
    with record_store.persisting(db, "delete account"):
        db.commit()
    logger.info("Deleted account %s", user_id)
