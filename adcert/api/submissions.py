"""Submission routes: advertiser intake, reviewer queue and review actions."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session, joinedload
from adcert.core.certificate_pdf import CertificatePDF, certificate_pdf_data, render_qr_png
from adcert.core.database import get_db
from adcert.core.deps import get_current_user
from adcert.core.exceptions import NotFound
from adcert.core.submission_workflow import (
    create_submission as create_submission_record,
    get_submission as get_submission_record,
    list_comments,
    list_submissions as list_submission_records,
    reissue_missing_certificate,
    transition_submission,
)
from adcert.models.certificate import Certificate
from adcert.models.enums import SubmissionStatus
from adcert.models.submission import Submission
from adcert.models.user import User
from adcert.schemas.certificate import CertificateResponse
from adcert.schemas.submission import (
    SubmissionCommentResponse,
    SubmissionCreate,
    SubmissionDetailResponse,
    SubmissionResponse,
    TransitionRequest,
    TransitionResponse,
)

router = APIRouter()


def _detail_response(db: Session, submission: Submission, current_user: User) -> SubmissionDetailResponse:
    response = SubmissionDetailResponse.model_validate(submission)
    response.comments = [
        SubmissionCommentResponse.model_validate(c)
        for c in list_comments(db, submission, current_user)
    ]
    return response


@router.post("/", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def create_submission(
    submission_data: SubmissionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Submit a campaign for review (advertisers only). Starts in 'pending'."""
    return create_submission_record(db, current_user, submission_data.model_dump())


@router.get("/", response_model=List[SubmissionResponse])
def list_submissions(
    status_filter: Optional[SubmissionStatus] = Query(
        None, alias="status", description="Only return submissions in this status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List submissions, newest first.

    Advertisers get their own submissions; reviewers and admins get the full queue.
    """
    return list_submission_records(db, current_user, status_filter)


@router.get("/{submission_id}", response_model=SubmissionDetailResponse)
def get_submission(
    submission_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a submission with its comment thread and certificate."""
    submission = get_submission_record(db, submission_id, current_user)
    return _detail_response(db, submission, current_user)


@router.get("/{submission_id}/comments", response_model=List[SubmissionCommentResponse])
def get_submission_comments(
    submission_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the review comment thread, oldest first."""
    submission = get_submission_record(db, submission_id, current_user)
    return list_comments(db, submission, current_user)


@router.post("/{submission_id}/transition", response_model=TransitionResponse)
def transition(
    submission_id: int,
    action: TransitionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Move a submission through review (reviewers and admins).

    Approval also issues the certificate. If the comment or the certificate
    could not be recorded the status change still stands and the failure is
    listed under ``issues``.
    """
    outcome = transition_submission(
        db,
        submission_id,
        current_user,
        action.target_status,
        comment=action.comment,
        is_internal=action.is_internal,
        expected_status=action.expected_status,
    )
    return TransitionResponse.model_validate(outcome)


@router.post(
    "/{submission_id}/certificate",
    response_model=CertificateResponse,
    status_code=status.HTTP_201_CREATED
)
def reissue_certificate(
    submission_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Re-run certificate issuance for an approved submission without one (admin only)."""
    return reissue_missing_certificate(db, submission_id, current_user)


def _certificate_for_download(db: Session, submission_id: int, current_user: User) -> Certificate:
    submission = get_submission_record(db, submission_id, current_user)

    certificate = db.query(Certificate).options(
        joinedload(Certificate.submission).joinedload(Submission.advertiser)
    ).filter(Certificate.submission_id == submission.submission_id).first()
    if not certificate:
        raise NotFound(f"Submission {submission_id} has no certificate")
    return certificate


@router.get("/{submission_id}/certificate/pdf")
def download_certificate_pdf(
    submission_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Download the printable certificate for an approved submission."""
    certificate = _certificate_for_download(db, submission_id, current_user)

    pdf = CertificatePDF(certificate_pdf_data(certificate))
    pdf_bytes = pdf.generate()

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={certificate.certificate_number}.pdf"
        }
    )


@router.get("/{submission_id}/certificate/qr")
def download_certificate_qr(
    submission_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Download the verification QR code as a PNG."""
    certificate = _certificate_for_download(db, submission_id, current_user)

    return Response(
        content=render_qr_png(certificate.qr_code_data),
        media_type="image/png",
        headers={
            "Content-Disposition": f"attachment; filename={certificate.certificate_number}-qr.png"
        }
    )
