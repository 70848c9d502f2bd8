"""
Materials Aggregator
Collects the job text, cover letter and extracted document text for one
application into a single bundle for the AI reviewer.
"""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from candidate_review.core.errors import NotFound
from candidate_review.models.application import Application
from candidate_review.models.application_document import ApplicationDocument, DocumentStatus


@dataclass(frozen=True)
class ApplicationMaterials:
    """Everything the prompt builder needs about one application."""

    application_id: UUID
    job_id: UUID
    business_id: UUID
    job_title: str
    job_description: str
    job_requirements: Optional[str]
    cover_letter: Optional[str]
    document_text: Optional[str]

    @property
    def has_candidate_text(self) -> bool:
        """True when there is a cover letter or extracted document text to review."""
        return bool(self.cover_letter or self.document_text)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def combine_document_text(texts: List[str]) -> Optional[str]:
    """Number and join extracted texts; None when there is nothing to join."""
    if not texts:
        return None
    return "\n\n".join(f"Document {index}:\n{text}" for index, text in enumerate(texts, start=1))


class MaterialsAggregator:
    """Builds ApplicationMaterials from the store."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def collect(self, application_id: UUID) -> ApplicationMaterials:
        """
        Load the application, its job and completed documents.

        Raises:
            NotFound: if the application or its job does not exist
        """
        result = await self.db.execute(
            select(Application)
            .options(selectinload(Application.job))
            .where(Application.id == application_id)
        )
        application = result.scalar_one_or_none()

        if application is None or application.job is None:
            raise NotFound(f"Application {application_id} not found")

        job = application.job
        texts = await self._completed_document_texts(application_id)

        return ApplicationMaterials(
            application_id=application.id,
            job_id=job.id,
            business_id=job.business_id,
            job_title=_clean(job.title) or "Job",
            job_description=job.description or "",
            job_requirements=_clean(job.requirements),
            cover_letter=_clean(application.cover_letter),
            document_text=combine_document_text(texts),
        )

    async def _completed_document_texts(self, application_id: UUID) -> List[str]:
        """Completed, non-empty extracted texts in creation order."""
        result = await self.db.execute(
            select(ApplicationDocument)
            .where(
                ApplicationDocument.application_id == application_id,
                ApplicationDocument.status == DocumentStatus.COMPLETED.value,
            )
            .order_by(ApplicationDocument.created_at.asc(), ApplicationDocument.id.asc())
        )
        documents = result.scalars().all()

        return [doc.extracted_text.strip() for doc in documents if doc.extracted_text and doc.extracted_text.strip()]
