"""Resumable review bookmark per (job, business)."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, Uuid

from candidate_review.db.base import Base


class ReviewProgress(Base):
    """A business's position in a job's review queue."""

    __tablename__ = "business_review_progress"
    __table_args__ = (
        UniqueConstraint("job_id", "business_id", name="unique_job_business_progress"),
    )

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    last_reviewed_application_id = Column(
        Uuid(as_uuid=True), ForeignKey("applications.id", ondelete="SET NULL"), nullable=True
    )
    reviewed_count = Column(Integer, default=0, nullable=False)
    total_applications = Column(Integer, default=0, nullable=False)
    resumed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<ReviewProgress job={self.job_id} {self.reviewed_count}/{self.total_applications}>"
