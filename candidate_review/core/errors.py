"""Domain errors raised by the review pipeline and mapped to HTTP responses in main.py."""

from fastapi import status


class CandidateReviewError(Exception):
    """Base class for review pipeline errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CandidateReviewError):
    """Application or job does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(CandidateReviewError):
    """Request data failed a domain rule (e.g. rating out of range)."""

    status_code = status.HTTP_400_BAD_REQUEST


class Forbidden(CandidateReviewError):
    """Caller does not own the job or application."""

    status_code = status.HTTP_403_FORBIDDEN


class InferenceError(CandidateReviewError):
    """The inference call failed or returned unparseable output."""

    status_code = status.HTTP_502_BAD_GATEWAY
