"""Submission schemas."""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from adcert.models.enums import AdvertCategory, GeographicScope, SubmissionStatus
from adcert.schemas.certificate import CertificateResponse
from adcert.schemas.user import UserBrief


class SubmissionCreate(BaseModel):
    brand_name: str = Field(..., min_length=1, max_length=255)
    campaign_title: str = Field(..., min_length=1, max_length=255)
    advert_category: AdvertCategory
    geographic_scope: GeographicScope
    geographic_details: Optional[str] = None
    campaign_start_date: date
    campaign_end_date: date
    creative_materials_urls: List[str] = []
    supporting_documents_urls: List[str] = []
    notes: Optional[str] = None
    payment_confirmed: bool = False

    @model_validator(mode="after")
    def check_campaign_window(self):
        if self.campaign_end_date < self.campaign_start_date:
            raise ValueError("campaign_end_date must be on or after campaign_start_date")
        return self


class SubmissionCommentResponse(BaseModel):
    comment_id: int
    submission_id: int
    reviewer_id: int
    reviewer: Optional[UserBrief] = None
    comment: str
    is_internal: bool
    action_taken: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubmissionResponse(BaseModel):
    submission_id: int
    advertiser_id: int
    advertiser: Optional[UserBrief] = None
    brand_name: str
    campaign_title: str
    advert_category: AdvertCategory
    geographic_scope: GeographicScope
    geographic_details: Optional[str] = None
    campaign_start_date: date
    campaign_end_date: date
    creative_materials_urls: List[str] = []
    supporting_documents_urls: List[str] = []
    notes: Optional[str] = None
    payment_confirmed: bool
    status: SubmissionStatus
    reviewed_by_id: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    submitted_at: datetime
    certificate: Optional[CertificateResponse] = None

    model_config = ConfigDict(from_attributes=True)


class SubmissionDetailResponse(SubmissionResponse):
    comments: List[SubmissionCommentResponse] = []


class TransitionRequest(BaseModel):
    target_status: SubmissionStatus
    comment: Optional[str] = None
    is_internal: bool = False
    expected_status: Optional[SubmissionStatus] = Field(
        None, description="Status the reviewer saw; the change is refused if it moved since")


class TransitionIssueResponse(BaseModel):
    error: str
    detail: str
    retryable: bool

    model_config = ConfigDict(from_attributes=True)


class TransitionResponse(BaseModel):
    submission: SubmissionResponse
    previous_status: SubmissionStatus
    comment: Optional[SubmissionCommentResponse] = None
    certificate: Optional[CertificateResponse] = None
    issues: List[TransitionIssueResponse] = []

    model_config = ConfigDict(from_attributes=True)
