"""
Job Review Queue API
Review progress overview and AI shortlisting for a job's applicants
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_review.api.deps import get_db, require_business_user
from candidate_review.config import settings
from candidate_review.core.security import AuthUser
from candidate_review.schemas.review import AISelectRequest, AISelectResponse, ReviewProgressResponse
from candidate_review.services.ai_review import clamp_shortlist_count, shortlist_applications
from candidate_review.services.prompt_builder import normalize_hints
from candidate_review.services.progress_tracker import ProgressTracker
from candidate_review.services.review_workflow import load_owned_job

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/{job_id}/review-progress", response_model=ReviewProgressResponse)
async def get_review_progress(
    job_id: UUID,
    current_user: AuthUser = Depends(require_business_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the job's review queue and where the business left off.

    **Auth**: Business owning the job
    """
    job = await load_owned_job(db, job_id, current_user.user_id)
    return await ProgressTracker(db).job_overview(job, current_user.user_id)


@router.post("/{job_id}/ai-select", response_model=AISelectResponse)
async def ai_select_applications(
    job_id: UUID,
    select_in: AISelectRequest = AISelectRequest(),
    current_user: AuthUser = Depends(require_business_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Shortlist the job's applicants by AI rating.

    **Auth**: Business owning the job

    **Body**:
    - `count`: how many to return (rounded, clamped to 1..AI_SELECT_MAX_COUNT)
    - `hints`: free-text guidance passed to the AI reviewer
    """
    job = await load_owned_job(db, job_id, current_user.user_id)

    count = clamp_shortlist_count(
        select_in.count,
        default=settings.AI_SELECT_DEFAULT_COUNT,
        maximum=settings.AI_SELECT_MAX_COUNT,
    )
    hints = normalize_hints(select_in.hints)

    logger.info("ai_shortlist_requested", job_id=str(job_id), count=count, hints=len(hints))
    recommendations = await shortlist_applications(db, job, count, hints=hints)
    await db.commit()

    return AISelectResponse(recommendations=recommendations, hints=hints)
