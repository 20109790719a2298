"""Advertisement submission model."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING
from sqlalchemy import (
    String, Integer, Text, Date, DateTime, Boolean, ForeignKey, JSON, CheckConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from adcert.core.time import utc_now
from adcert.models.base import Base
from adcert.models.enums import (
    SubmissionStatus, AdvertCategory, GeographicScope, enum_column
)

if TYPE_CHECKING:
    from adcert.models.user import User
    from adcert.models.submission_comment import SubmissionComment
    from adcert.models.certificate import Certificate


class Submission(Base):
    """An advertiser's request for campaign approval.

    Campaign fields are fixed at creation. Only review transitions change
    ``status``, ``reviewed_by_id`` and ``reviewed_at``; rows are never deleted.
    """
    __tablename__ = "submissions"
    __table_args__ = (
        CheckConstraint(
            "campaign_end_date >= campaign_start_date",
            name="ck_submissions_campaign_dates"
        ),
        Index("ix_submissions_status_submitted_at", "status", "submitted_at"),
    )

    submission_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    advertiser_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="RESTRICT"),
        nullable=False, index=True)

    # Campaign details
    brand_name: Mapped[str] = mapped_column(String(255), nullable=False)
    campaign_title: Mapped[str] = mapped_column(String(255), nullable=False)
    advert_category: Mapped[AdvertCategory] = mapped_column(
        enum_column(AdvertCategory, "advert_category"), nullable=False)
    geographic_scope: Mapped[GeographicScope] = mapped_column(
        enum_column(GeographicScope, "geographic_scope"), nullable=False)
    geographic_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    campaign_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    campaign_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    creative_materials_urls: Mapped[List[str]] = mapped_column(
        JSON, nullable=False, default=list,
        comment="Storage paths of uploaded creative materials")
    supporting_documents_urls: Mapped[List[str]] = mapped_column(
        JSON, nullable=False, default=list,
        comment="Storage paths of uploaded supporting documents")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False)

    # Review state
    status: Mapped[SubmissionStatus] = mapped_column(
        enum_column(SubmissionStatus, "submission_status"),
        nullable=False, default=SubmissionStatus.PENDING)
    reviewed_by_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    # Relationships
    advertiser: Mapped["User"] = relationship("User", foreign_keys=[advertiser_id])
    reviewed_by: Mapped[Optional["User"]] = relationship("User", foreign_keys=[reviewed_by_id])
    comments: Mapped[List["SubmissionComment"]] = relationship(
        "SubmissionComment", back_populates="submission",
        order_by="SubmissionComment.created_at", cascade="all, delete-orphan")
    certificate: Mapped[Optional["Certificate"]] = relationship(
        "Certificate", back_populates="submission", uselist=False)
