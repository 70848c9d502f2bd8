"""
Application Review API
Review state, manual review saves and on-demand AI suggestions
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_review.api.deps import get_current_user, get_db, require_business_user
from candidate_review.core.security import AuthUser
from candidate_review.schemas.review import (
    AIReviewResponse,
    AIReviewTriggerRequest,
    ReviewStateResponse,
    SaveReviewRequest,
    SaveReviewResponse,
)
from candidate_review.services.ai_review import generate_ai_suggestion, run_ai_review_in_background
from candidate_review.services.review_workflow import (
    load_owned_application,
    load_review_state,
    save_review,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/{application_id}/review", response_model=ReviewStateResponse)
async def get_review_state(
    application_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the review screen state for one application.

    **Auth**: Business owning the job, or the applicant

    Returns the application summary, the manual review (or null), the AI
    suggestion (or null) and the application's position in the job queue.
    """
    return await load_review_state(db, application_id, current_user)


@router.post("/{application_id}/review", response_model=SaveReviewResponse)
async def save_application_review(
    application_id: UUID,
    review_in: SaveReviewRequest,
    current_user: AuthUser = Depends(require_business_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Save a manual rating/note.

    **Auth**: Business owning the job

    Marks the application reviewed, moves the review-progress bookmark and,
    when `advance` is true, returns the next unreviewed application.
    """
    result = await save_review(
        db,
        application_id,
        current_user,
        rating=review_in.rating,
        note=review_in.note,
        advance=review_in.advance,
    )
    await db.commit()
    return result


@router.post("/{application_id}/ai", response_model=AIReviewResponse)
async def trigger_ai_review(
    application_id: UUID,
    background_tasks: BackgroundTasks,
    trigger_in: AIReviewTriggerRequest = AIReviewTriggerRequest(),
    wait: bool = Query(True, description="Run inline and return the result"),
    current_user: AuthUser = Depends(require_business_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Regenerate the AI suggestion for an application.

    **Auth**: Business owning the job

    With `wait=false` the run is queued as a background task and the endpoint
    answers 202 immediately; failures are only logged.
    """
    await load_owned_application(db, application_id, current_user.user_id)

    if not wait:
        background_tasks.add_task(run_ai_review_in_background, application_id, trigger_in.hints)
        logger.info("ai_review_queued", application_id=str(application_id), source="on_demand")
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content={"message": "AI suggestion queued", "status": "queued"},
        )

    outcome = await generate_ai_suggestion(db, application_id, hints=trigger_in.hints)
    await db.commit()

    return AIReviewResponse(
        message="AI suggestion skipped" if outcome.skipped else "AI suggestion generated",
        status=outcome.status,
        reason=outcome.reason,
        rating=outcome.rating,
        summary=outcome.summary,
        version=outcome.version,
    )
