"""Review schemas for API requests and responses."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from candidate_review.services.ai_review import SkipReason


class JobSeekerBrief(BaseModel):
    """Brief applicant information."""
    id: UUID
    name: Optional[str] = None
    email: Optional[str] = None


class ApplicationSummary(BaseModel):
    """Application as shown on the review screen."""
    id: UUID
    job_id: UUID
    job_title: Optional[str] = None
    status: str
    created_at: datetime
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    notes: Optional[str] = None  # projection of the review note for older screens
    job_seeker: Optional[JobSeekerBrief] = None


class ManualReview(BaseModel):
    """Reviewer's own rating and note."""
    id: UUID
    rating: Optional[int] = None
    note: Optional[str] = None
    reviewer_id: Optional[UUID] = None
    updated_at: Optional[datetime] = None


class AISuggestionResponse(BaseModel):
    """AI rating and summary."""
    rating: Optional[int] = None
    summary: Optional[str] = None
    version: Optional[str] = None
    generated_at: Optional[datetime] = None


class QueuePositionResponse(BaseModel):
    """Where the application sits in the job's queue."""
    position: Optional[int] = None
    total: int
    previous_application_id: Optional[UUID] = None
    next_application_id: Optional[UUID] = None


class ReviewStateResponse(BaseModel):
    """Everything the review screen needs for one application."""
    application: ApplicationSummary
    review: Optional[ManualReview] = None
    ai_suggestion: Optional[AISuggestionResponse] = None
    progress: QueuePositionResponse


class SaveReviewRequest(BaseModel):
    """Manual review submission."""
    # Left untyped so strings and booleans reach the service check and surface as 400s
    rating: Any = None
    note: Optional[str] = Field(None, max_length=5000)
    advance: bool = True


class SaveReviewProgress(BaseModel):
    position: int
    total: int


class SaveReviewResponse(BaseModel):
    """Result of saving a manual review."""
    message: str
    next_application_id: Optional[UUID] = None
    progress: SaveReviewProgress


class AIReviewResponse(BaseModel):
    """Outcome of an on-demand AI review."""
    message: str
    status: str  # completed, skipped, queued
    reason: Optional[SkipReason] = None
    rating: Optional[int] = None
    summary: Optional[str] = None
    version: Optional[str] = None


class AIReviewTriggerRequest(BaseModel):
    """Optional recruiter guidance for the AI reviewer."""
    hints: List[str] = Field(default_factory=list)


class QueueItem(BaseModel):
    """One row of the review-progress queue."""
    id: UUID
    position: int
    status: str
    created_at: datetime
    reviewed_at: Optional[datetime] = None
    job_seeker: Optional[JobSeekerBrief] = None
    manual_rating: Optional[int] = None
    ai_rating: Optional[int] = None
    ai_summary: Optional[str] = None
    review_updated_at: Optional[datetime] = None


class JobBrief(BaseModel):
    id: UUID
    title: str


class ReviewProgressSummary(BaseModel):
    total_applications: int
    reviewed_count: int
    last_reviewed_application_id: Optional[UUID] = None
    last_reviewed_at: Optional[datetime] = None
    next_application_id: Optional[UUID] = None
    needs_reconciliation: bool = False


class ReviewProgressResponse(BaseModel):
    """Queue overview with the business's resume bookmark."""
    job: JobBrief
    queue: List[QueueItem]
    summary: ReviewProgressSummary


class AISelectRequest(BaseModel):
    """AI shortlist request."""
    count: Optional[float] = None
    hints: List[str] = Field(default_factory=list)


class AISelectItem(BaseModel):
    application_id: UUID
    name: Optional[str] = None
    email: Optional[str] = None
    rating: int
    summary: Optional[str] = None


class AISelectResponse(BaseModel):
    """Top applications by AI rating."""
    recommendations: List[AISelectItem]
    hints: List[str] = Field(default_factory=list)
