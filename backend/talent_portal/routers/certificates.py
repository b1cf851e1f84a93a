"""Certificate verification routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.models.user import User, Role
from talent_portal.permissions import require_view
from talent_portal.schemas.portal import CertificateUpload, CertificateVerificationOut, VerifiedCertificateOut
from talent_portal.services import certificate_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/verify", response_model=CertificateVerificationOut)
def verify_certificate(
    payload: CertificateUpload,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("certs")),
):
    """Run the uploaded image past the AI verifier. Only VERIFIED results are stored."""
    analysis, saved = certificate_service.verify_and_store(
        db, actor.user_id, payload.image_base64, payload.mime_type
    )
    logger.info(
        "Certificate check for %s: %s (%.0f)",
        actor.user_id, analysis.verification_status, analysis.confidence_score,
    )
    return CertificateVerificationOut(
        **analysis.model_dump(),
        certificate_id=saved.certificate_id if saved else None,
    )


@router.get("/", response_model=list[VerifiedCertificateOut])
def list_certificates(
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("dashboard")),
):
    """Stored certificates, newest first. Candidates only see their own."""
    if actor.role == Role.candidate or user_id is None:
        user_id = actor.user_id
    return certificate_service.list_user_certificates(db, user_id)
