"""RequestHistory tool — the caller's own leave requests and IT tickets.

Always scoped to the signed-in user; the model cannot ask for anyone else's.
"""
from typing import Any

from sqlalchemy.orm import Session
from talent_portal.services.history_service import owner_history
from talent_portal.services.submission_service import has_pending_profile_update


TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "RequestHistory",
        "description": (
            "List the user's own leave requests and IT support tickets with their "
            "current status, newest first, and whether a profile update is awaiting "
            "approval. Use this for questions like 'was my leave approved?'."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of entries to return. Default: 10.",
                },
            },
            "required": [],
        },
    },
}


DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def _limit(raw: Any) -> int:
    # arguments come from the model; anything unusable means the default
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


def execute(db: Session, args: dict[str, Any], user_id: str) -> dict[str, Any]:
    limit = _limit(args.get("limit", DEFAULT_LIMIT))
    entries = []
    for record in owner_history(db, user_id)[:limit]:
        entry = {
            "kind": record.kind.value,
            "status": record.status.value,
            "submitted_date": record.submitted_date.isoformat(),
        }
        if record.kind.value == "leave":
            entry.update(leave_type=record.leave_type, dates=record.dates)
        else:
            entry.update(category=record.category, priority=record.priority.value)
        entries.append(entry)
    return {
        "requests": entries,
        "pending_profile_update": has_pending_profile_update(db, user_id),
    }
