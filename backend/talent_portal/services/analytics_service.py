"""Candidate risk analytics over the candidate_metrics collection."""
from typing import Any, Optional

from sqlalchemy.orm import Session

from talent_portal.models.candidate_metric import CandidateMetric
from talent_portal.services import ai_service, record_store


def _as_oracle_input(metric: CandidateMetric) -> dict[str, Any]:
    return {
        "id": metric.user_id,
        "name": metric.name,
        "cohort_name": metric.cohort_name,
        "sponsor": metric.sponsor,
        "technical_score": metric.technical_score,
        "soft_skill_score": metric.soft_skill_score,
        "attendance": metric.attendance,
        "projects_completed": metric.projects_completed,
    }


def list_metrics(db: Session, cohort_name: Optional[str] = None) -> list[CandidateMetric]:
    filters = {"cohort_name": cohort_name} if cohort_name else {}
    return record_store.list_where(db, "candidate_metrics", **filters)


def analyze_risk(db: Session, cohort_name: Optional[str] = None) -> list[dict[str, Any]]:
    """Score every (optionally cohort-filtered) candidate. Unscored data comes back on oracle failure."""
    metrics = [_as_oracle_input(m) for m in list_metrics(db, cohort_name)]
    return ai_service.analyze_candidate_risk(metrics)
