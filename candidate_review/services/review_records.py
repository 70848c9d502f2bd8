"""
Review Record Manager
Owns the one-review-per-application row. Manual and AI paths upsert only
their own columns, keyed by application_id.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_review.core.errors import ValidationError
from candidate_review.db.upsert import upsert_insert
from candidate_review.models.application import Application, ApplicationStatus
from candidate_review.models.application_review import ApplicationReview
from candidate_review.services.ai.base import AISuggestion

logger = structlog.get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: Any) -> int:
    """
    Accept only integers in [1, 5].

    Raises:
        ValidationError: if the rating is missing, not an integer or out of range
    """
    if rating is None:
        raise ValidationError("Rating is required.")
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be a whole number between 1 and 5.")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError("Rating must be a number between 1 and 5.")
    return rating


def normalize_note(note: Optional[str]) -> Optional[str]:
    """Trim the note; blank notes are stored as NULL."""
    if note is None:
        return None
    return note.strip() or None


def legacy_application_notes(review: Optional[ApplicationReview]) -> Optional[str]:
    """
    Project Review.note onto the application view.

    Older screens read ``notes`` from the application record. The review row
    is the only stored copy; this projection is how those readers get it.
    """
    return review.note if review is not None else None


class ReviewRecordManager:
    """Reads and upserts application reviews."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_review(self, application_id: UUID) -> Optional[ApplicationReview]:
        """Merged manual + AI view, or None when the application was never reviewed."""
        result = await self.db.execute(
            select(ApplicationReview)
            .where(ApplicationReview.application_id == application_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def save_manual_review(
        self,
        application_id: UUID,
        reviewer_id: UUID,
        rating: Any,
        note: Optional[str] = None,
    ) -> ApplicationReview:
        """
        Upsert the manual rating/note and mark the application reviewed.

        AI columns are never touched here. Re-saving overwrites the manual
        fields in place.
        """
        rating = validate_rating(rating)
        note = normalize_note(note)
        now = datetime.utcnow()

        table = ApplicationReview.__table__
        stmt = upsert_insert(self.db, table).values(
            application_id=application_id,
            reviewer_id=reviewer_id,
            rating=rating,
            note=note,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.application_id],
            set_={
                "reviewer_id": stmt.excluded.reviewer_id,
                "rating": stmt.excluded.rating,
                "note": stmt.excluded.note,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.db.execute(stmt)

        await self.db.execute(
            update(Application)
            .where(Application.id == application_id)
            .values(
                status=ApplicationStatus.REVIEWED.value,
                reviewed_at=now,
                reviewed_by=reviewer_id,
                updated_at=now,
            )
            .execution_options(synchronize_session="fetch")
        )
        await self.db.flush()

        logger.info("manual_review_saved", application_id=str(application_id), rating=rating)
        return await self.get_review(application_id)

    async def record_ai_suggestion(
        self,
        application_id: UUID,
        suggestion: AISuggestion,
    ) -> ApplicationReview:
        """
        Upsert only the AI columns.

        Creates the row with empty manual fields when none exists yet; an
        existing manual rating/note is left as it is. Running this again for
        the same application only overwrites the AI columns.
        """
        now = datetime.utcnow()

        table = ApplicationReview.__table__
        stmt = upsert_insert(self.db, table).values(
            application_id=application_id,
            ai_rating=suggestion.rating,
            ai_summary=suggestion.summary,
            ai_version=suggestion.version,
            ai_generated_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.application_id],
            set_={
                "ai_rating": stmt.excluded.ai_rating,
                "ai_summary": stmt.excluded.ai_summary,
                "ai_version": stmt.excluded.ai_version,
                "ai_generated_at": stmt.excluded.ai_generated_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.db.execute(stmt)
        await self.db.flush()

        logger.info(
            "ai_suggestion_recorded",
            application_id=str(application_id),
            ai_rating=suggestion.rating,
            ai_version=suggestion.version,
        )
        return await self.get_review(application_id)
