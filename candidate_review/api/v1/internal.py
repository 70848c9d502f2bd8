"""
Internal API
Hooks called by the submission flow and the document-extraction service
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, status

from candidate_review.api.deps import verify_internal_secret
from candidate_review.schemas.review import AIReviewTriggerRequest
from candidate_review.services.ai_review import run_ai_review_in_background

logger = structlog.get_logger(__name__)
router = APIRouter(dependencies=[Depends(verify_internal_secret)])


@router.post("/applications/{application_id}/ai-trigger", status_code=status.HTTP_202_ACCEPTED)
async def trigger_ai_review_for_application(
    application_id: UUID,
    background_tasks: BackgroundTasks,
    trigger_in: AIReviewTriggerRequest = AIReviewTriggerRequest(),
):
    """
    Queue an AI review after an application is registered or one of its
    documents finishes extraction.

    Always answers 202: the AI run happens after the response and its
    failures are logged, never returned to the caller.
    """
    background_tasks.add_task(run_ai_review_in_background, application_id, trigger_in.hints)
    logger.info("ai_review_queued", application_id=str(application_id), source="internal")
    return {"message": "AI suggestion queued", "application_id": str(application_id)}
