"""Reviewer comment recorded alongside a status transition."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from sqlalchemy import String, Integer, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from adcert.core.time import utc_now
from adcert.models.base import Base

if TYPE_CHECKING:
    from adcert.models.submission import Submission
    from adcert.models.user import User


class SubmissionComment(Base):
    """Immutable note left by a reviewer when acting on a submission."""
    __tablename__ = "submission_comments"

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    submission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("submissions.submission_id", ondelete="CASCADE"),
        nullable=False, index=True)
    reviewer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    is_internal: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="Internal comments are hidden from the advertiser")
    action_taken: Mapped[Optional[str]] = mapped_column(
        String(30), nullable=True,
        comment="Status the submission moved to when the comment was left")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False)

    # Relationships
    submission: Mapped["Submission"] = relationship("Submission", back_populates="comments")
    reviewer: Mapped["User"] = relationship("User")
