"""
Certificate issuance and verification.

Issuance mints one certificate per approved submission:

- Number: ``<PREFIX>-<year>-<NNNNNN>`` where NNNNNN is a zero-padded random
  draw from 0..999999. The number space is only 10^6 per year, so every draw
  is checked against the store and the unique constraint on
  ``certificate_number`` is the final arbiter when two issuers race.
- Payload: the public verification URL for the number.
- Window: ``valid_from = today``, ``valid_until = today + validity days``.

Verification is a keyed, read-only lookup returning a three-way
classification (VALID / EXPIRED / INVALID) rather than a boolean.
"""
import enum
import logging
import secrets
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from adcert.core.config import settings
from adcert.core.exceptions import (
    CertificateIssuanceFailed, DuplicateCertificate, NotFound, Unauthorized
)
from adcert.core.roles import is_admin
from adcert.core.time import utc_now, utc_today
from adcert.models.audit_log import AuditLog
from adcert.models.certificate import Certificate
from adcert.models.enums import SubmissionStatus
from adcert.models.submission import Submission
from adcert.models.user import User

logger = logging.getLogger(__name__)

SEQUENCE_SPACE = 1_000_000


class VerificationStatus(str, enum.Enum):
    VALID = "VALID"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"


@dataclass(frozen=True)
class VerificationResult:
    classification: VerificationStatus
    certificate: Optional[Certificate] = None


def draw_sequence() -> int:
    return secrets.randbelow(SEQUENCE_SPACE)


def format_certificate_number(year: int, sequence: int) -> str:
    return f"{settings.CERTIFICATE_NUMBER_PREFIX}-{year:04d}-{sequence:06d}"


def build_verification_url(certificate_number: str) -> str:
    return f"{settings.VERIFICATION_BASE_URL.rstrip('/')}/verify/{certificate_number}"


def _number_taken(db: Session, certificate_number: str) -> bool:
    return db.query(Certificate.certificate_id).filter(
        Certificate.certificate_number == certificate_number
    ).first() is not None


def _has_certificate(db: Session, submission_id: int) -> bool:
    return db.query(Certificate.certificate_id).filter(
        Certificate.submission_id == submission_id
    ).first() is not None


def issue_certificate(db: Session, submission_id: int, issued_by_id: Optional[int] = None) -> Certificate:
    """Mint the certificate for an approved submission.

    Raises:
        NotFound: submission missing or not approved.
        DuplicateCertificate: the submission already has a certificate.
        CertificateIssuanceFailed: every number draw collided.
    """
    submission = db.query(Submission).filter(
        Submission.submission_id == submission_id
    ).first()
    if not submission or submission.status != SubmissionStatus.APPROVED:
        raise NotFound(f"No approved submission with id {submission_id}")

    if _has_certificate(db, submission_id):
        raise DuplicateCertificate(
            f"Submission {submission_id} already has a certificate")

    today = utc_today()
    valid_until = today + timedelta(days=settings.CERTIFICATE_VALIDITY_DAYS)

    for attempt in range(1, settings.CERTIFICATE_NUMBER_MAX_ATTEMPTS + 1):
        number = format_certificate_number(today.year, draw_sequence())
        if _number_taken(db, number):
            logger.warning(
                "Certificate number %s already issued (attempt %d), drawing again",
                number, attempt)
            continue

        certificate = Certificate(
            submission_id=submission_id,
            certificate_number=number,
            qr_code_data=build_verification_url(number),
            issued_at=utc_now(),
            valid_from=today,
            valid_until=valid_until,
            is_active=True,
        )
        try:
            db.add(certificate)
            db.flush()
            db.add(AuditLog(
                entity_type="Certificate",
                entity_id=certificate.certificate_id,
                action="ISSUE",
                user_id=issued_by_id,
                changes={
                    "submission_id": submission_id,
                    "certificate_number": number,
                    "valid_from": today.isoformat(),
                    "valid_until": valid_until.isoformat(),
                },
            ))
            db.commit()
        except IntegrityError:
            db.rollback()
            # Either another issuer took the number or won the one-to-one race
            if _has_certificate(db, submission_id):
                raise DuplicateCertificate(
                    f"Submission {submission_id} already has a certificate")
            if not _number_taken(db, number):
                # Not a numbering collision; redrawing cannot help
                raise
            logger.warning(
                "Certificate number %s collided on insert (attempt %d), drawing again",
                number, attempt)
            continue

        db.refresh(certificate)
        logger.info(
            "Issued certificate %s for submission %d (valid %s to %s)",
            number, submission_id, today, valid_until)
        return certificate

    raise CertificateIssuanceFailed(
        f"Could not allocate a unique certificate number for submission {submission_id} "
        f"after {settings.CERTIFICATE_NUMBER_MAX_ATTEMPTS} attempts")


def classify_certificate(certificate: Certificate, today: date) -> VerificationStatus:
    if not certificate.is_active:
        return VerificationStatus.INVALID
    if today > certificate.valid_until:
        return VerificationStatus.EXPIRED
    if today < certificate.valid_from:
        return VerificationStatus.INVALID
    return VerificationStatus.VALID


def verify_certificate(db: Session, certificate_number: str) -> VerificationResult:
    """Classify a certificate number for public verification.

    Unknown and revoked numbers are INVALID with no details attached.
    """
    certificate = db.query(Certificate).options(
        joinedload(Certificate.submission).joinedload(Submission.advertiser)
    ).filter(
        Certificate.certificate_number == certificate_number.strip(),
        Certificate.is_active.is_(True)
    ).first()

    if certificate is None:
        return VerificationResult(VerificationStatus.INVALID)
    return VerificationResult(classify_certificate(certificate, utc_today()), certificate)


def revoke_certificate(
    db: Session,
    certificate_number: str,
    actor: User,
    reason: Optional[str] = None
) -> Certificate:
    """Deactivate a certificate. Administrators only; idempotent."""
    if not is_admin(actor):
        raise Unauthorized("Only administrators can revoke certificates")

    certificate = db.query(Certificate).filter(
        Certificate.certificate_number == certificate_number.strip()
    ).first()
    if not certificate:
        raise NotFound(f"Certificate {certificate_number} not found")

    if not certificate.is_active:
        return certificate

    certificate.is_active = False
    certificate.revoked_at = utc_now()
    certificate.revoked_by_id = actor.user_id
    certificate.revocation_reason = reason
    db.add(AuditLog(
        entity_type="Certificate",
        entity_id=certificate.certificate_id,
        action="REVOKE",
        user_id=actor.user_id,
        changes={"is_active": False, "reason": reason},
    ))
    db.commit()
    db.refresh(certificate)
    logger.info("Certificate %s revoked by user %d", certificate_number, actor.user_id)
    return certificate
