"""Row-level visibility rules for submissions."""
from sqlalchemy.orm import Query
from adcert.core.roles import can_review
from adcert.models.submission import Submission
from adcert.models.user import User


def can_see_all_submissions(user: User) -> bool:
    """Reviewers and administrators see the whole queue."""
    return can_review(user)


def apply_submission_rls(query: Query, user: User) -> Query:
    """
    Restrict a Submission query to the rows ``user`` may see.

    Advertisers only see submissions they created.
    """
    if can_see_all_submissions(user):
        return query
    return query.filter(Submission.advertiser_id == user.user_id)
