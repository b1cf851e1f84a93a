"""Role -> view access table.

Each portal view is a named entry; a role may open a view only if the view is
in its set. Endpoints declare the view they belong to with ``require_view``.
"""
from fastapi import Depends, Query
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.errors import PermissionDeniedError
from talent_portal.models.user import User, Role
from talent_portal.services import record_store

VIEWS = frozenset({
    "dashboard", "profile", "learning", "performance", "forms", "certs",
    "directory", "documents", "feedback", "risk", "cohorts", "announcements",
    "approvals", "admin",
})

_SHARED = frozenset({"dashboard", "profile", "directory", "documents", "feedback"})

VIEW_ACCESS: dict[Role, frozenset[str]] = {
    Role.candidate: _SHARED | {"learning", "performance", "forms", "certs"},
    Role.tech_champion: _SHARED | {"risk", "performance", "cohorts", "announcements", "approvals"},
    Role.manager: _SHARED | {"risk", "performance", "cohorts", "announcements", "approvals"},
    Role.admin: _SHARED | {"admin", "risk", "cohorts", "announcements", "approvals"},
}


def can_access(role: Role, view: str) -> bool:
    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view}")
    return view in VIEW_ACCESS.get(role, frozenset())


def require_view(view: str):
    """Dependency factory: resolve ``actor_user_id`` and check it may open ``view``."""
    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view}")

    def _dependency(
        actor_user_id: str = Query(..., description="ID of the signed-in user performing the action"),
        db: Session = Depends(get_db),
    ) -> User:
        actor = record_store.get(db, "users", actor_user_id)
        if not can_access(actor.role, view):
            raise PermissionDeniedError(f"{actor.role.value} may not access {view}")
        return actor

    return _dependency
