"""
Review Workflow
Composes the queue navigator, review records and progress tracker into the
review-state and save-review operations used by the API.
"""

from typing import Any, Dict, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from candidate_review.core.errors import Forbidden, NotFound
from candidate_review.core.security import AuthUser, UserType
from candidate_review.models.application import Application
from candidate_review.models.job import Job
from candidate_review.services.progress_tracker import ProgressTracker
from candidate_review.services.queue_navigator import (
    QueueNavigator,
    locate_in_queue,
    next_unreviewed_after,
)
from candidate_review.services.review_records import ReviewRecordManager, legacy_application_notes

logger = structlog.get_logger(__name__)


async def load_application(db: AsyncSession, application_id: UUID) -> Application:
    """Application with its job and applicant loaded; NotFound if either is missing."""
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job), selectinload(Application.job_seeker))
        .where(Application.id == application_id)
    )
    application = result.scalar_one_or_none()

    if application is None or application.job is None:
        raise NotFound("Application not found")
    return application


async def load_owned_application(db: AsyncSession, application_id: UUID, business_id: UUID) -> Application:
    """Application whose job belongs to ``business_id``."""
    application = await load_application(db, application_id)
    if application.job.business_id != business_id:
        raise Forbidden("You do not have access to this application")
    return application


async def load_owned_job(db: AsyncSession, job_id: UUID, business_id: UUID) -> Job:
    """Job owned by ``business_id``."""
    result = await db.execute(select(Job).where(Job.id == job_id))
    job = result.scalar_one_or_none()

    if job is None:
        raise NotFound("Job not found")
    if job.business_id != business_id:
        raise Forbidden("You do not have access to this job")
    return job


def _check_can_view(application: Application, user: AuthUser) -> None:
    if user.user_type == UserType.BUSINESS:
        if application.job.business_id != user.user_id:
            raise Forbidden("You do not have access to this application")
    elif user.user_type == UserType.JOBSEEKER:
        if application.job_seeker_id != user.user_id:
            raise Forbidden("You do not have access to this application")
    else:
        raise Forbidden("You do not have access to this application")


async def load_review_state(db: AsyncSession, application_id: UUID, user: AuthUser) -> Dict[str, Any]:
    """Application summary, review, AI suggestion and queue position."""
    application = await load_application(db, application_id)
    _check_can_view(application, user)

    review = await ReviewRecordManager(db).get_review(application_id)
    queue_position = await QueueNavigator(db).locate(application.job_id, application_id)

    seeker = application.job_seeker
    return {
        "application": {
            "id": application.id,
            "job_id": application.job_id,
            "job_title": application.job.title,
            "status": application.status,
            "created_at": application.created_at,
            "cover_letter": application.cover_letter,
            "resume_url": application.resume_url,
            "notes": legacy_application_notes(review),
            "job_seeker": {"id": seeker.id, "name": seeker.name, "email": seeker.email} if seeker else None,
        },
        "review": {
            "id": review.id,
            "rating": review.rating,
            "note": review.note,
            "reviewer_id": review.reviewer_id,
            "updated_at": review.updated_at,
        } if review else None,
        "ai_suggestion": {
            "rating": review.ai_rating,
            "summary": review.ai_summary,
            "version": review.ai_version,
            "generated_at": review.ai_generated_at,
        } if review is not None and review.ai_generated_at is not None else None,
        "progress": {
            "position": queue_position.position,
            "total": queue_position.total,
            "previous_application_id": queue_position.previous_application_id,
            "next_application_id": queue_position.next_application_id,
        },
    }


async def save_review(
    db: AsyncSession,
    application_id: UUID,
    user: AuthUser,
    rating: Any,
    note: Optional[str] = None,
    advance: bool = True,
) -> Dict[str, Any]:
    """
    Persist a manual review, move the progress bookmark and optionally
    return the next unreviewed application in the queue.
    """
    if not user.is_business:
        raise Forbidden("Business account required")

    application = await load_owned_application(db, application_id, user.user_id)
    job_id = application.job_id

    await ReviewRecordManager(db).save_manual_review(application_id, user.user_id, rating, note)

    entries = await QueueNavigator(db).ordered_queue(job_id)
    queue_position = locate_in_queue(entries, application_id)

    progress = await ProgressTracker(db).record_manual_save(job_id, user.user_id, application_id, queue_position)

    next_application_id = next_unreviewed_after(entries, application_id) if advance else None

    logger.info(
        "review_saved",
        application_id=str(application_id),
        job_id=str(job_id),
        position=queue_position.position,
        total=queue_position.total,
        next_application_id=str(next_application_id) if next_application_id else None,
    )

    return {
        "message": "Review saved",
        "next_application_id": next_application_id,
        "progress": {
            "position": queue_position.position if queue_position.position is not None else progress.reviewed_count,
            "total": queue_position.total,
        },
    }
