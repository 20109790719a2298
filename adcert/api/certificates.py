"""Certificate routes: public verification and administrative revocation."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from adcert.core.certificates import revoke_certificate, verify_certificate
from adcert.core.database import get_db
from adcert.core.deps import get_current_user
from adcert.models.user import User
from adcert.schemas.certificate import (
    CertificatePublicDetails,
    CertificateResponse,
    CertificateRevokeRequest,
    VerificationResponse,
)

router = APIRouter()


@router.get("/verify/{certificate_number}", response_model=VerificationResponse)
def verify(certificate_number: str, db: Session = Depends(get_db)):
    """
    Verify a certificate number. No authentication required.

    Returns VALID, EXPIRED or INVALID. Details are only disclosed when an
    active certificate with that number exists.
    """
    result = verify_certificate(db, certificate_number)
    if result.certificate is None:
        return VerificationResponse(classification=result.classification)

    certificate = result.certificate
    submission = certificate.submission
    advertiser = submission.advertiser
    return VerificationResponse(
        classification=result.classification,
        certificate=CertificatePublicDetails(
            certificate_number=certificate.certificate_number,
            campaign_title=submission.campaign_title,
            brand_name=submission.brand_name,
            advert_category=submission.advert_category,
            geographic_scope=submission.geographic_scope,
            advertiser_name=advertiser.full_name if advertiser else None,
            company_name=advertiser.company_name if advertiser else None,
            issued_at=certificate.issued_at,
            valid_from=certificate.valid_from,
            valid_until=certificate.valid_until,
        )
    )


@router.post("/{certificate_number}/revoke", response_model=CertificateResponse)
def revoke(
    certificate_number: str,
    revoke_data: CertificateRevokeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Revoke a certificate (admin only). The number stays reserved."""
    return revoke_certificate(db, certificate_number, current_user, revoke_data.reason)
