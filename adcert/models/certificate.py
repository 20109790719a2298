"""Approval certificate model."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, TYPE_CHECKING
from sqlalchemy import String, Integer, Text, Date, DateTime, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from adcert.core.time import utc_now
from adcert.models.base import Base

if TYPE_CHECKING:
    from adcert.models.submission import Submission
    from adcert.models.user import User


class Certificate(Base):
    """Proof of approval for exactly one submission.

    ``certificate_number`` (ARCON-YYYY-NNNNNN) is printed on artifacts handed
    to third parties; it, the verification payload and the validity window
    never change after issuance. Revocation only clears ``is_active``.
    """
    __tablename__ = "certificates"
    __table_args__ = (
        CheckConstraint("valid_until > valid_from", name="ck_certificates_validity_window"),
    )

    certificate_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    submission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("submissions.submission_id", ondelete="CASCADE"),
        nullable=False, unique=True)
    certificate_number: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, index=True)
    qr_code_data: Mapped[str] = mapped_column(
        Text, nullable=False,
        comment="Verification URL embedding the certificate number")
    issued_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    valid_from: Mapped[date] = mapped_column(Date, nullable=False)
    valid_until: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Revocation metadata
    revoked_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    revoked_by_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    revocation_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    submission: Mapped["Submission"] = relationship("Submission", back_populates="certificate")
    revoked_by: Mapped[Optional["User"]] = relationship("User")
