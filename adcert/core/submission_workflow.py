"""
Submission lifecycle: creation, review transitions and listing.

Status machine::

    pending          -> under_review | approved | rejected | requires_changes
    under_review     -> approved | rejected | requires_changes
    requires_changes -> under_review | approved | rejected
    approved, rejected: terminal

A transition is applied with a conditional UPDATE keyed on the status the
caller acted on, so when two reviewers race only one write lands and the
other gets InvalidTransition. The status change (plus its audit entry) is
committed first; the optional comment and, for approvals, certificate
issuance follow in their own units of work. Their failures are reported on
the returned outcome and never undo the status change.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Union

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from adcert.core.certificates import issue_certificate
from adcert.core.exceptions import (
    CertificateIssuanceFailed, InvalidSubmission, InvalidTransition, NotFound, Unauthorized
)
from adcert.core.rls import apply_submission_rls
from adcert.core.roles import can_review, is_admin, is_advertiser
from adcert.core.time import utc_now
from adcert.models.audit_log import AuditLog
from adcert.models.certificate import Certificate
from adcert.models.enums import SubmissionStatus
from adcert.models.submission import Submission
from adcert.models.submission_comment import SubmissionComment
from adcert.models.user import User

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[SubmissionStatus, FrozenSet[SubmissionStatus]] = {
    SubmissionStatus.PENDING: frozenset({
        SubmissionStatus.UNDER_REVIEW,
        SubmissionStatus.APPROVED,
        SubmissionStatus.REJECTED,
        SubmissionStatus.REQUIRES_CHANGES,
    }),
    SubmissionStatus.UNDER_REVIEW: frozenset({
        SubmissionStatus.APPROVED,
        SubmissionStatus.REJECTED,
        SubmissionStatus.REQUIRES_CHANGES,
    }),
    SubmissionStatus.REQUIRES_CHANGES: frozenset({
        SubmissionStatus.UNDER_REVIEW,
        SubmissionStatus.APPROVED,
        SubmissionStatus.REJECTED,
    }),
    SubmissionStatus.APPROVED: frozenset(),
    SubmissionStatus.REJECTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

# Fields an advertiser supplies when creating a submission
SUBMISSION_FIELDS = (
    "brand_name",
    "campaign_title",
    "advert_category",
    "geographic_scope",
    "geographic_details",
    "campaign_start_date",
    "campaign_end_date",
    "creative_materials_urls",
    "supporting_documents_urls",
    "notes",
    "payment_confirmed",
)


@dataclass
class TransitionIssue:
    """A follow-up step that failed after the status change committed."""
    error: str
    detail: str
    retryable: bool = True


@dataclass
class TransitionOutcome:
    submission: Submission
    previous_status: SubmissionStatus
    comment: Optional[SubmissionComment] = None
    certificate: Optional[Certificate] = None
    issues: List[TransitionIssue] = field(default_factory=list)


def is_terminal(status: SubmissionStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: SubmissionStatus, target: SubmissionStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def _coerce_status(value: Union[str, SubmissionStatus]) -> SubmissionStatus:
    try:
        return SubmissionStatus(value)
    except ValueError:
        raise InvalidTransition(f"Unknown submission status '{value}'")


def create_submission(db: Session, advertiser: User, fields: Mapping[str, Any]) -> Submission:
    """Store a new submission in ``pending`` with no review metadata."""
    if not is_advertiser(advertiser):
        raise Unauthorized("Only advertisers can create submissions")

    values = {key: fields[key] for key in SUBMISSION_FIELDS if key in fields}
    start = values.get("campaign_start_date")
    end = values.get("campaign_end_date")
    if start is None or end is None:
        raise InvalidSubmission("Campaign start and end dates are required")
    if end < start:
        raise InvalidSubmission("Campaign end date cannot be before the start date")

    submission = Submission(
        advertiser_id=advertiser.user_id,
        status=SubmissionStatus.PENDING,
        reviewed_by_id=None,
        reviewed_at=None,
        submitted_at=utc_now(),
        **values
    )
    db.add(submission)
    db.flush()
    db.add(AuditLog(
        entity_type="Submission",
        entity_id=submission.submission_id,
        action="CREATE",
        user_id=advertiser.user_id,
        changes={
            "status": SubmissionStatus.PENDING.value,
            "campaign_title": submission.campaign_title,
            "brand_name": submission.brand_name,
        },
    ))
    db.commit()
    db.refresh(submission)
    logger.info(
        "Submission %d created by advertiser %d", submission.submission_id, advertiser.user_id)
    return submission


def get_submission(db: Session, submission_id: int, actor: User) -> Submission:
    """Fetch one submission the actor may see, with comments and certificate."""
    query = db.query(Submission).options(
        joinedload(Submission.advertiser),
        joinedload(Submission.reviewed_by),
        joinedload(Submission.comments).joinedload(SubmissionComment.reviewer),
        joinedload(Submission.certificate),
    ).filter(Submission.submission_id == submission_id)
    submission = apply_submission_rls(query, actor).first()
    if not submission:
        raise NotFound(f"Submission {submission_id} not found")
    return submission


def list_submissions(
    db: Session,
    actor: User,
    status: Optional[Union[str, SubmissionStatus]] = None
) -> List[Submission]:
    """Submissions visible to the actor, newest submission first."""
    query = db.query(Submission).options(
        joinedload(Submission.advertiser),
        joinedload(Submission.certificate),
    )
    query = apply_submission_rls(query, actor)
    if status is not None:
        query = query.filter(Submission.status == _coerce_status(status))
    return query.order_by(
        Submission.submitted_at.desc(), Submission.submission_id.desc()
    ).all()


def list_comments(db: Session, submission: Submission, actor: User) -> List[SubmissionComment]:
    """Comment thread, oldest first. Advertisers never see internal notes."""
    query = db.query(SubmissionComment).options(
        joinedload(SubmissionComment.reviewer)
    ).filter(SubmissionComment.submission_id == submission.submission_id)
    if not can_review(actor):
        query = query.filter(SubmissionComment.is_internal.is_(False))
    return query.order_by(
        SubmissionComment.created_at.asc(), SubmissionComment.comment_id.asc()
    ).all()


def transition_submission(
    db: Session,
    submission_id: int,
    actor: User,
    target_status: Union[str, SubmissionStatus],
    comment: Optional[str] = None,
    is_internal: bool = False,
    expected_status: Optional[Union[str, SubmissionStatus]] = None,
) -> TransitionOutcome:
    """Move a submission to ``target_status`` on behalf of a reviewer.

    ``expected_status`` is the status the caller based its decision on; when
    omitted the status read at the start of this call is used. Either way
    the write only lands if the stored status still matches.

    Raises:
        Unauthorized: actor is neither reviewer nor administrator.
        NotFound: no such submission.
        InvalidTransition: terminal/disallowed move, or the status changed
            underneath the caller.
        DuplicateCertificate: approval found an existing certificate.
    """
    # Capability is checked before state: non-reviewers get Unauthorized even on terminal submissions
    if not can_review(actor):
        raise Unauthorized("Only reviewers and administrators can change submission status")

    target = _coerce_status(target_status)

    submission = db.query(Submission).filter(
        Submission.submission_id == submission_id
    ).first()
    if not submission:
        raise NotFound(f"Submission {submission_id} not found")

    current = submission.status
    if expected_status is not None:
        expected = _coerce_status(expected_status)
        if expected != current:
            raise InvalidTransition(
                f"Submission {submission_id} is '{current.value}', not '{expected.value}'; "
                "refresh and retry")
        current = expected

    if is_terminal(current):
        raise InvalidTransition(
            f"Submission {submission_id} is '{current.value}' and can no longer change status")
    if not can_transition(current, target):
        raise InvalidTransition(
            f"Cannot move submission {submission_id} from '{current.value}' to '{target.value}'")

    now = utc_now()
    result = db.execute(
        update(Submission)
        .where(
            Submission.submission_id == submission_id,
            Submission.status == current,
        )
        .values(
            status=target,
            reviewed_by_id=actor.user_id,
            reviewed_at=now,
            updated_at=now,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        logger.info(
            "Transition of submission %d to %s lost a race; status is no longer %s",
            submission_id, target.value, current.value)
        raise InvalidTransition(
            f"Submission {submission_id} changed status while this request was in flight; "
            "refresh and retry")

    db.add(AuditLog(
        entity_type="Submission",
        entity_id=submission_id,
        action="TRANSITION",
        user_id=actor.user_id,
        changes={"status": {"old": current.value, "new": target.value}},
    ))
    db.commit()
    logger.info(
        "Submission %d moved from %s to %s by user %d",
        submission_id, current.value, target.value, actor.user_id)

    outcome = TransitionOutcome(submission=submission, previous_status=current)

    text = comment.strip() if comment else ""
    if text:
        outcome.comment = _record_comment(
            db, submission_id, actor, text, is_internal, target, now, outcome.issues)

    if target == SubmissionStatus.APPROVED:
        outcome.certificate = _issue_for_approval(db, submission_id, actor, outcome.issues)

    db.refresh(submission)
    return outcome


def _record_comment(
    db: Session,
    submission_id: int,
    actor: User,
    text: str,
    is_internal: bool,
    target: SubmissionStatus,
    created_at: datetime,
    issues: List[TransitionIssue],
) -> Optional[SubmissionComment]:
    # Best effort: the transition already committed
    entry = SubmissionComment(
        submission_id=submission_id,
        reviewer_id=actor.user_id,
        comment=text,
        is_internal=is_internal,
        action_taken=target.value,
        created_at=created_at,
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(
            "Comment for submission %d could not be recorded after transition to %s",
            submission_id, target.value)
        issues.append(TransitionIssue(
            error="CommentWriteFailed",
            detail=f"Status changed to '{target.value}' but the comment was not saved: {exc}",
        ))
        return None
    db.refresh(entry)
    return entry


def _issue_for_approval(
    db: Session,
    submission_id: int,
    actor: User,
    issues: List[TransitionIssue],
) -> Optional[Certificate]:
    try:
        return issue_certificate(db, submission_id, issued_by_id=actor.user_id)
    except CertificateIssuanceFailed as exc:
        logger.exception("Certificate issuance failed for approved submission %d", submission_id)
        issues.append(TransitionIssue(error=exc.code, detail=exc.message, retryable=True))
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Certificate issuance failed for approved submission %d", submission_id)
        failure = CertificateIssuanceFailed(
            f"Submission {submission_id} was approved but its certificate was not issued: {exc}")
        issues.append(TransitionIssue(error=failure.code, detail=failure.message, retryable=True))
    return None


def reissue_missing_certificate(db: Session, submission_id: int, actor: User) -> Certificate:
    """Operator retry for an approved submission whose issuance failed."""
    if not is_admin(actor):
        raise Unauthorized("Only administrators can re-run certificate issuance")
    return issue_certificate(db, submission_id, issued_by_id=actor.user_id)
