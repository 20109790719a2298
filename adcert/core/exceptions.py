"""Workflow error taxonomy.

Core modules raise these; the API layer renders them with the status code and
a stable ``error`` code so callers can tell "retry", "refresh and retry",
"not permitted" and "does not exist" apart.
"""
from fastapi import status


class WorkflowError(Exception):
    """Base class for errors surfaced to callers."""
    code = "WorkflowError"
    status_code = status.HTTP_400_BAD_REQUEST
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": self.code, "retryable": self.retryable}


class NotFound(WorkflowError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class Unauthorized(WorkflowError):
    code = "Unauthorized"
    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransition(WorkflowError):
    """The requested status change is not allowed from the current status.

    Also raised when another caller changed the status first; the caller
    should re-fetch the submission before retrying.
    """
    code = "InvalidTransition"
    status_code = status.HTTP_409_CONFLICT


class DuplicateCertificate(WorkflowError):
    code = "DuplicateCertificate"
    status_code = status.HTTP_409_CONFLICT


class CertificateIssuanceFailed(WorkflowError):
    """Issuance failed after the submission was approved.

    The approval stands; issuance can be re-invoked for the submission.
    """
    code = "CertificateIssuanceFailed"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True


class InvalidSubmission(WorkflowError):
    """Submission fields violate a creation invariant."""
    code = "InvalidSubmission"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
