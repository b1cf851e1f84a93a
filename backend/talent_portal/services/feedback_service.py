"""Candidate feedback — stored together with the oracle's sentiment analysis."""
from typing import Optional

from sqlalchemy.orm import Session

from talent_portal.errors import ValidationError
from talent_portal.models.feedback import FeedbackEntry, FeedbackCategory
from talent_portal.services import ai_service, record_store


def submit_feedback(db: Session, user_id: str, category: str, content: str) -> FeedbackEntry:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Feedback content is required")
    try:
        feedback_category = FeedbackCategory(category)
    except ValueError:
        raise ValidationError(f"Invalid feedback category '{category}'")
    user = record_store.get(db, "users", user_id)

    analysis = ai_service.analyze_feedback(content, feedback_category.value)
    return record_store.create(db, "feedback", {
        "user_id": user.user_id,
        "user_name": user.display_name,
        "date": record_store.portal_today(),
        "category": feedback_category,
        "content": content,
        **analysis.model_dump(),
    })


def list_feedback(db: Session, user_id: Optional[str] = None) -> list[FeedbackEntry]:
    """All feedback (newest first), or one user's own."""
    filters = {"user_id": user_id} if user_id else {}
    return record_store.list_where(db, "feedback", order_by="date", **filters)
