"""Pydantic schemas for cohorts, announcements, score cards, certificates and feedback."""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field

from talent_portal.models.announcement import AnnouncementType
from talent_portal.models.feedback import FeedbackCategory


class CohortCreate(BaseModel):
    name: str
    program: str
    sponsor: Optional[str] = None
    start_date: date
    size: int = Field(0, ge=0)


class CohortOut(BaseModel):
    cohort_id: str
    name: str
    program: str
    sponsor: Optional[str] = None
    start_date: date
    size: int

    model_config = {"from_attributes": True}


class AnnouncementCreate(BaseModel):
    title: str
    content: str
    type: AnnouncementType = AnnouncementType.general
    target_cohort_id: str = "All"
    image_url: Optional[str] = None


class AnnouncementOut(BaseModel):
    announcement_id: str
    title: str
    content: str
    date: date
    type: str
    target_cohort_id: str
    target_cohort_name: Optional[str] = None
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ScoreCardCreate(BaseModel):
    candidate_id: str
    week: int = Field(..., ge=1)
    attendance: int = Field(..., ge=0, le=100)
    communication: int = Field(..., ge=0, le=100)
    accountability: int = Field(..., ge=0, le=100)
    creativity_ownership: int = Field(..., ge=0, le=100)
    object_delivery: int = Field(..., ge=0, le=100)
    tech_skills: int = Field(..., ge=0, le=100)
    comments: str = ""


class ScoreCardOut(BaseModel):
    scorecard_id: str
    candidate_id: str
    candidate_name: str
    reviewer_name: str
    date: date
    week: int
    attendance: int
    communication: int
    accountability: int
    creativity_ownership: int
    object_delivery: int
    tech_skills: int
    comments: str

    model_config = {"from_attributes": True}


class CertificateUpload(BaseModel):
    image_base64: str
    mime_type: str


class CertificateVerificationOut(BaseModel):
    candidate_name: Optional[str] = None
    course_name: Optional[str] = None
    issue_date: Optional[str] = None
    issuer: Optional[str] = None
    verification_status: str
    confidence_score: float
    reason: str
    certificate_id: Optional[str] = None  # set only when the result was stored


class VerifiedCertificateOut(BaseModel):
    certificate_id: str
    user_id: str
    candidate_name: Optional[str] = None
    course_name: Optional[str] = None
    issue_date: Optional[str] = None
    issuer: Optional[str] = None
    verification_status: str
    confidence_score: float
    reason: Optional[str] = None
    verified_at: datetime

    model_config = {"from_attributes": True}


class FeedbackCreate(BaseModel):
    category: FeedbackCategory = FeedbackCategory.general
    content: str


class FeedbackOut(BaseModel):
    feedback_id: str
    user_id: str
    user_name: str
    date: date
    category: str
    content: str
    sentiment: str
    topics: list[str]
    ai_summary: str
    urgency: str

    model_config = {"from_attributes": True}


class CandidateMetricOut(BaseModel):
    user_id: str
    name: str
    cohort_name: Optional[str] = None
    sponsor: Optional[str] = None
    technical_score: int
    soft_skill_score: int
    attendance: int
    projects_completed: int

    model_config = {"from_attributes": True}


class CandidateRiskOut(BaseModel):
    id: str
    name: str
    cohort_name: Optional[str] = None
    sponsor: Optional[str] = None
    technical_score: int
    soft_skill_score: int
    attendance: int
    projects_completed: int
    risk_score: Optional[float] = None
    risk_level: Optional[str] = None
    ai_analysis: Optional[str] = None
