"""Job model."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from candidate_review.db.base import Base


class Job(Base):
    """Job posting model (read-only from the review pipeline)."""

    __tablename__ = "jobs"

    title = Column(String(500), nullable=False, index=True)
    description = Column(Text)
    requirements = Column(Text, nullable=True)

    # Owning business; used for ownership checks and review progress
    business_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    is_active = Column(Boolean, default=True)

    # Relationships
    business = relationship("User", foreign_keys=[business_id])
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Job {self.title} ({self.business_id})>"
