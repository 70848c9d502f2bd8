"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from candidate_review.models.user import User

# Models with foreign keys to base models
from candidate_review.models.job import Job

# Models with foreign keys to other models
from candidate_review.models.application import Application, ApplicationStatus
from candidate_review.models.application_document import ApplicationDocument, DocumentStatus
from candidate_review.models.application_review import ApplicationReview
from candidate_review.models.review_progress import ReviewProgress

# Export all models
__all__ = [
    "User",
    "Job",
    "Application",
    "ApplicationStatus",
    "ApplicationDocument",
    "DocumentStatus",
    "ApplicationReview",
    "ReviewProgress",
]
