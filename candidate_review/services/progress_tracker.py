"""
Progress Tracker
Persists a business's resumable position in a job's review queue.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from candidate_review.db.upsert import upsert_insert
from candidate_review.models.application import Application
from candidate_review.models.application_review import ApplicationReview
from candidate_review.models.job import Job
from candidate_review.models.review_progress import ReviewProgress
from candidate_review.services.queue_navigator import QueuePosition

logger = structlog.get_logger(__name__)


class ProgressTracker:
    """Reads and upserts ReviewProgress rows keyed by (job, business)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_progress(self, job_id: UUID, business_id: UUID) -> Optional[ReviewProgress]:
        result = await self.db.execute(
            select(ReviewProgress)
            .where(ReviewProgress.job_id == job_id, ReviewProgress.business_id == business_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def record_manual_save(
        self,
        job_id: UUID,
        business_id: UUID,
        application_id: UUID,
        queue_position: QueuePosition,
    ) -> ReviewProgress:
        """
        Bookmark the just-saved application.

        reviewed_count is the saved application's queue position, or the queue
        size when it could not be positioned.
        """
        reviewed_count = queue_position.position if queue_position.position is not None else queue_position.total
        now = datetime.utcnow()

        table = ReviewProgress.__table__
        stmt = upsert_insert(self.db, table).values(
            job_id=job_id,
            business_id=business_id,
            last_reviewed_application_id=application_id,
            reviewed_count=reviewed_count,
            total_applications=queue_position.total,
            resumed_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.job_id, table.c.business_id],
            set_={
                "last_reviewed_application_id": stmt.excluded.last_reviewed_application_id,
                "reviewed_count": stmt.excluded.reviewed_count,
                "total_applications": stmt.excluded.total_applications,
                "resumed_at": stmt.excluded.resumed_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.db.execute(stmt)
        await self.db.flush()

        logger.info(
            "review_progress_updated",
            job_id=str(job_id),
            business_id=str(business_id),
            reviewed_count=reviewed_count,
            total=queue_position.total,
        )
        return await self.get_progress(job_id, business_id)

    async def job_overview(self, job: Job, business_id: UUID) -> Dict[str, Any]:
        """
        Queue listing plus resume summary for the review-progress screen.

        The stored reviewed_count is reported as-is. When the bookmarked
        application has left the queue, or the count is larger than the
        current queue, ``needs_reconciliation`` is set instead of rewriting it.
        """
        result = await self.db.execute(
            select(Application)
            .options(selectinload(Application.job_seeker))
            .where(Application.job_id == job.id)
            .order_by(Application.created_at.asc(), Application.id.asc())
        )
        applications = result.scalars().all()

        reviews_by_application = {}
        if applications:
            reviews_result = await self.db.execute(
                select(ApplicationReview).where(
                    ApplicationReview.application_id.in_([app.id for app in applications])
                )
            )
            reviews_by_application = {review.application_id: review for review in reviews_result.scalars().all()}

        progress = await self.get_progress(job.id, business_id)

        queue = []
        for index, application in enumerate(applications):
            review = reviews_by_application.get(application.id)
            seeker = application.job_seeker
            queue.append({
                "id": application.id,
                "position": index + 1,
                "status": application.status,
                "created_at": application.created_at,
                "reviewed_at": application.reviewed_at,
                "job_seeker": {"id": seeker.id, "name": seeker.name, "email": seeker.email} if seeker else None,
                "manual_rating": review.rating if review else None,
                "ai_rating": review.ai_rating if review else None,
                "ai_summary": review.ai_summary if review else None,
                "review_updated_at": review.updated_at if review else None,
            })

        total = len(applications)
        ordered_ids = [app.id for app in applications]
        last_reviewed_id = progress.last_reviewed_application_id if progress else None
        last_index = ordered_ids.index(last_reviewed_id) if last_reviewed_id in ordered_ids else -1

        # After the bookmark; otherwise start over from the top
        if 0 <= last_index < total - 1:
            next_id = ordered_ids[last_index + 1]
        else:
            next_id = ordered_ids[0] if ordered_ids else None

        needs_reconciliation = False
        if progress is not None:
            bookmark_missing = last_index == -1
            needs_reconciliation = bookmark_missing or progress.reviewed_count > total
            if needs_reconciliation:
                logger.warning(
                    "review_progress_needs_reconciliation",
                    job_id=str(job.id),
                    business_id=str(business_id),
                    stored_reviewed_count=progress.reviewed_count,
                    current_total=total,
                    bookmark_missing=bookmark_missing,
                )

        return {
            "job": {"id": job.id, "title": job.title},
            "queue": queue,
            "summary": {
                "total_applications": total,
                "reviewed_count": progress.reviewed_count if progress else 0,
                "last_reviewed_application_id": last_reviewed_id,
                "last_reviewed_at": progress.resumed_at if progress else None,
                "next_application_id": next_id,
                "needs_reconciliation": needs_reconciliation,
            },
        }
