"""User model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from adcert.core.roles import RoleCode
from adcert.core.time import utc_now
from adcert.models.base import Base
from adcert.models.enums import enum_column


class User(Base):
    """Portal account: advertisers submit campaigns, reviewers and admins decide them."""
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[RoleCode] = mapped_column(
        enum_column(RoleCode, "user_role"), nullable=False, default=RoleCode.ADVERTISER)
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="Set by an administrator once the advertiser's identity is confirmed")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now)
