"""Certificate schemas."""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from adcert.core.certificates import VerificationStatus
from adcert.models.enums import AdvertCategory, GeographicScope


class CertificateResponse(BaseModel):
    certificate_id: int
    submission_id: int
    certificate_number: str
    qr_code_data: str
    issued_at: datetime
    valid_from: date
    valid_until: date
    is_active: bool
    revoked_at: Optional[datetime] = None
    revocation_reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CertificateRevokeRequest(BaseModel):
    reason: Optional[str] = None


class CertificatePublicDetails(BaseModel):
    """Fields disclosed to anonymous verifiers."""
    certificate_number: str
    campaign_title: str
    brand_name: str
    advert_category: AdvertCategory
    geographic_scope: GeographicScope
    advertiser_name: Optional[str] = None
    company_name: Optional[str] = None
    issued_at: datetime
    valid_from: date
    valid_until: date


class VerificationResponse(BaseModel):
    classification: VerificationStatus
    certificate: Optional[CertificatePublicDetails] = None
