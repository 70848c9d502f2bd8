"""Extracted-text documents attached to applications."""

from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from candidate_review.db.base import Base


class DocumentStatus(str, Enum):
    """Extraction status, written by the document-processing service."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ApplicationDocument(Base):
    """
    Text extracted from an uploaded resume or attachment.

    Rows are produced by the external extraction collaborator; this service
    only reads completed ones.
    """

    __tablename__ = "application_documents"

    application_id = Column(
        Uuid(as_uuid=True), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False
    )
    document_type = Column(String(50), nullable=True)  # resume, cover_letter, portfolio
    storage_path = Column(String(1000), nullable=True)

    status = Column(String(20), default=DocumentStatus.PENDING.value, nullable=False)
    extracted_text = Column(Text, nullable=True)
    extracted_metadata = Column(JSON, default=dict)
    extracted_at = Column(DateTime, nullable=True)

    # Relationships
    application = relationship("Application", back_populates="documents")

    __table_args__ = (
        Index("idx_application_documents_app_created", "application_id", "created_at"),
        Index("idx_application_documents_status", "status"),
    )

    def __repr__(self):
        return f"<ApplicationDocument {self.application_id} ({self.status})>"
