"""AI review tasks enqueued by the submission flow and the extraction service."""

import asyncio
from typing import Dict, List, Optional
from uuid import UUID

import structlog
from sqlalchemy.pool import NullPool

from candidate_review.core.logging import setup_logging
from candidate_review.db.session import build_engine, build_session_factory
from candidate_review.services.ai_review import AIReviewOutcome, run_ai_review_in_background
from candidate_review.workers.celery_app import celery_app

setup_logging()
logger = structlog.get_logger(__name__)


async def _run_with_fresh_engine(application_id: UUID, hints: Optional[List[str]]) -> Optional[AIReviewOutcome]:
    # Each task gets its own event loop, so pooled connections can't be shared
    engine = build_engine(poolclass=NullPool)
    try:
        return await run_ai_review_in_background(application_id, hints, session_factory=build_session_factory(engine))
    finally:
        await engine.dispose()


@celery_app.task(name="candidate_review.workers.ai_review.generate_ai_review")
def generate_ai_review(application_id: str, hints: Optional[List[str]] = None) -> Dict:
    """
    Generate the AI suggestion for one application.

    Never raises to the broker: failures are logged by the runner and
    reported in the task result.
    """
    try:
        application_uuid = UUID(application_id)
    except ValueError:
        logger.error("ai_review_task_bad_id", application_id=application_id)
        return {"status": "failed", "application_id": application_id, "reason": "invalid_application_id"}

    outcome = asyncio.run(_run_with_fresh_engine(application_uuid, hints))

    if outcome is None:
        return {"status": "failed", "application_id": application_id}

    return {
        "status": outcome.status,
        "application_id": application_id,
        "reason": outcome.reason.value if outcome.reason else None,
        "rating": outcome.rating,
    }
