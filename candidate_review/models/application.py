"""Application model."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from candidate_review.db.base import Base


class ApplicationStatus(str, Enum):
    """Application lifecycle states."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(Base):
    """A candidate's submission to one job."""

    __tablename__ = "applications"
    __table_args__ = (
        # Queue order: created_at ascending, id as tie-break
        Index("idx_applications_job_queue", "job_id", "created_at", "id"),
    )

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job_seeker_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    cover_letter = Column(Text, nullable=True)
    resume_url = Column(String(1000), nullable=True)

    # Status tracking
    status = Column(String(20), default=ApplicationStatus.PENDING.value, nullable=False)
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)

    # Relationships
    job = relationship("Job", back_populates="applications")
    job_seeker = relationship("User", foreign_keys=[job_seeker_id])
    documents = relationship(
        "ApplicationDocument",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="ApplicationDocument.created_at",
    )

    def __repr__(self):
        return f"<Application {self.job_seeker_id} -> {self.job_id} ({self.status})>"
