"""AI oracle — certificate verification, risk scoring and feedback analysis.

The completion model is treated as untrusted: every reply is parsed against a
pydantic schema, and any failure (no key, transport error, bad JSON, schema
mismatch) becomes an ExternalServiceError that the public functions below
swap for a fixed fallback. Callers never see the oracle fail.
"""
import json
import logging
from typing import Any, Literal, Optional

import openai
from openai import OpenAI
from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from talent_portal.config import settings
from talent_portal.errors import ExternalServiceError

logger = logging.getLogger(__name__)


# ── Oracle reply schemas ───────────────────────────────────────────
class CertificateAnalysis(BaseModel):
    candidate_name: Optional[str] = Field(None, alias="candidateName")
    course_name: Optional[str] = Field(None, alias="courseName")
    issue_date: Optional[str] = Field(None, alias="issueDate")
    issuer: Optional[str] = None
    verification_status: Literal["VERIFIED", "REJECTED", "PENDING"] = Field(alias="verificationStatus")
    confidence_score: float = Field(alias="confidenceScore", ge=0, le=100)
    reason: str

    model_config = {"populate_by_name": True}


class RiskResult(BaseModel):
    id: str
    risk_score: float = Field(alias="riskScore", ge=0, le=100)
    risk_level: Literal["Low", "Medium", "High"] = Field(alias="riskLevel")
    ai_analysis: str = Field(alias="aiAnalysis")

    model_config = {"populate_by_name": True}


class RiskBatch(BaseModel):
    results: list[RiskResult]


class FeedbackAnalysis(BaseModel):
    sentiment: Literal["Positive", "Neutral", "Negative"]
    topics: list[str]
    ai_summary: str = Field(alias="aiSummary")
    urgency: Literal["Low", "Medium", "High"]

    model_config = {"populate_by_name": True}


CERTIFICATE_FALLBACK = CertificateAnalysis(
    verification_status="REJECTED",
    confidence_score=0,
    reason="AI Service Error: Could not process image.",
)

FEEDBACK_FALLBACK = FeedbackAnalysis(
    sentiment="Neutral",
    topics=["General"],
    ai_summary="Could not analyze content.",
    urgency="Low",
)

# ── Prompts ────────────────────────────────────────────────────────
CERTIFICATE_PROMPT = """Analyze this image strictly. It must be a legitimate academic, course completion, or professional certificate.

1. Look for: Issuer Name, Candidate Name, Date, Signatures, Seals/Logos.
2. If it is a generic image, a random screenshot, a meme, or an unrelated document, set verificationStatus to "REJECTED" and give a reason (e.g. "Image does not resemble a certificate").
3. If it looks authentic, set verificationStatus to "VERIFIED".
4. Extract the data if available.

Reply with a JSON object with keys: candidateName, courseName, issueDate, issuer (strings or null),
verificationStatus ("VERIFIED" | "REJECTED" | "PENDING"), confidenceScore (0-100), reason (short explanation).
"""

RISK_PROMPT = """Analyze the following candidate performance data.
Calculate a "riskScore" (0-100, where 100 is high risk of dropping out) based on low attendance, low technical scores, or low soft skills.
Assign a "riskLevel" (Low, Medium, High).
Provide a short "aiAnalysis" sentence explaining the reason.

Reply with a JSON object {{"results": [{{"id", "riskScore", "riskLevel", "aiAnalysis"}}, ...]}}, one entry per candidate id.

Input Data:
{data}
"""

FEEDBACK_PROMPT = """Analyze this student feedback about {category}.
Feedback: "{content}"

Tasks:
1. Determine Sentiment (Positive, Neutral, Negative).
2. Extract up to 3 key topics (e.g. "Pacing", "Instructor", "Material").
3. Summarize the feedback in one short sentence.
4. Rate Urgency (High if it mentions harassment, severe blockers, or mental health; Medium for confusion/complaints; Low for praise/suggestions).

Reply with a JSON object with keys: sentiment, topics (array of strings), aiSummary, urgency.
"""


# ── Client plumbing ────────────────────────────────────────────────
def api_key_configured() -> bool:
    return bool(settings.OPENAI_API_KEY) and settings.OPENAI_API_KEY != "your-api-key-here"


def get_client() -> OpenAI:
    if not api_key_configured():
        raise ExternalServiceError("OpenAI API key not configured")
    return OpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.AI_TIMEOUT_SECONDS)


def complete_json(content: Any, schema: type[BaseModel]) -> BaseModel:
    """Send one user message, require a JSON object back, and validate it against ``schema``."""
    client = get_client()
    try:
        response = client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[{"role": "user", "content": content}],
            response_format={"type": "json_object"},
        )
    except openai.OpenAIError as e:
        raise ExternalServiceError(f"Completion request failed: {e}") from e

    text = response.choices[0].message.content if response.choices else None
    if not text:
        raise ExternalServiceError("No data returned")
    try:
        return schema.model_validate_json(text)
    except SchemaError as e:
        raise ExternalServiceError(f"Reply did not match {schema.__name__}: {e.error_count()} errors") from e


# ── Public oracle calls ────────────────────────────────────────────
def verify_certificate(image_base64: str, mime_type: str) -> CertificateAnalysis:
    content = [
        {"type": "text", "text": CERTIFICATE_PROMPT},
        {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_base64}"}},
    ]
    try:
        return complete_json(content, CertificateAnalysis)
    except ExternalServiceError as e:
        logger.error("Certificate verification error: %s", e)
        return CERTIFICATE_FALLBACK.model_copy(deep=True)


def analyze_candidate_risk(candidates: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return ``candidates`` with riskScore/riskLevel/aiAnalysis merged in by id.

    On any oracle failure the input is returned unchanged.
    """
    if not candidates:
        return []
    try:
        batch = complete_json(RISK_PROMPT.format(data=json.dumps(candidates, default=str)), RiskBatch)
    except ExternalServiceError as e:
        logger.error("Risk analysis error: %s", e)
        return candidates

    by_id = {r.id: r for r in batch.results}
    merged = []
    for candidate in candidates:
        result = by_id.get(str(candidate.get("id")))
        if result is None:
            merged.append(candidate)
        else:
            merged.append({**candidate, **result.model_dump(exclude={"id"})})
    return merged


def analyze_feedback(content: str, category: str) -> FeedbackAnalysis:
    try:
        analysis = complete_json(FEEDBACK_PROMPT.format(category=category, content=content), FeedbackAnalysis)
    except ExternalServiceError as e:
        logger.error("Feedback analysis error: %s", e)
        return FEEDBACK_FALLBACK.model_copy(deep=True)
    analysis.topics = analysis.topics[:3]
    return analysis
