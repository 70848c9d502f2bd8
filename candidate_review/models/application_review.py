"""Application review model (manual judgment + AI suggestion)."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from candidate_review.db.base import Base


class ApplicationReview(Base):
    """
    The single review row per application.

    Manual fields (rating, note, reviewer_id) and AI fields (ai_*) are written
    by independent paths; each path only touches its own columns.
    """

    __tablename__ = "application_reviews"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_review_rating_range"),
        CheckConstraint("ai_rating IS NULL OR (ai_rating >= 1 AND ai_rating <= 5)", name="ck_review_ai_rating_range"),
    )

    application_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Manual review
    reviewer_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    rating = Column(Integer, nullable=True)  # 1-5
    note = Column(Text, nullable=True)

    # AI suggestion
    ai_rating = Column(Integer, nullable=True)  # 1-5
    ai_summary = Column(Text, nullable=True)
    ai_version = Column(String(100), nullable=True)  # model identifier
    ai_generated_at = Column(DateTime, nullable=True)

    # Relationships
    application = relationship("Application")

    def __repr__(self):
        return f"<ApplicationReview {self.application_id} rating={self.rating} ai_rating={self.ai_rating}>"
