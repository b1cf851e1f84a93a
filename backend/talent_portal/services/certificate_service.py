"""Certificate verification flow — oracle check, then store VERIFIED results only."""
import base64
import binascii
import logging
from typing import Optional

from sqlalchemy.orm import Session

from talent_portal.errors import ValidationError
from talent_portal.models.certificate import VerifiedCertificate
from talent_portal.services import ai_service, record_store
from talent_portal.services.ai_service import CertificateAnalysis

logger = logging.getLogger(__name__)


def verify_and_store(
    db: Session, user_id: str, image_base64: str, mime_type: str
) -> tuple[CertificateAnalysis, Optional[VerifiedCertificate]]:
    """Run the oracle over an uploaded certificate image.

    Returns the analysis and, when it came back VERIFIED, the stored record.
    """
    if not (mime_type or "").startswith("image/"):
        raise ValidationError("Certificates must be uploaded as images")
    try:
        base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image payload is not valid base64")
    record_store.get(db, "users", user_id)

    analysis = ai_service.verify_certificate(image_base64, mime_type)
    if analysis.verification_status != "VERIFIED":
        logger.info("Certificate for user %s not stored: %s", user_id, analysis.reason)
        return analysis, None

    saved = record_store.create(db, "verified_certificates", {
        "user_id": user_id,
        **analysis.model_dump(),
    })
    return analysis, saved


def list_user_certificates(db: Session, user_id: str) -> list[VerifiedCertificate]:
    return record_store.list_where(db, "verified_certificates", order_by="verified_at", user_id=user_id)
