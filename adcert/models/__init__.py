"""Models package."""
from adcert.models.user import User
from adcert.models.submission import Submission
from adcert.models.submission_comment import SubmissionComment
from adcert.models.certificate import Certificate
from adcert.models.audit_log import AuditLog

__all__ = [
    "User",
    "Submission",
    "SubmissionComment",
    "Certificate",
    "AuditLog",
]
