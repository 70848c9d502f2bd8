"""
AI Review Pipeline
Materials -> prompt -> inference -> AI columns of the review row.

The pipeline is independent of manual review: it never changes an
application's status or the manual rating/note.
"""

import math
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from candidate_review.core.errors import InferenceError, NotFound
from candidate_review.models.application import Application
from candidate_review.models.job import Job
from candidate_review.services.ai import AIProvider, get_ai_provider
from candidate_review.services.materials import MaterialsAggregator
from candidate_review.services.prompt_builder import build_review_prompt, normalize_hints
from candidate_review.services.queue_navigator import QueueNavigator
from candidate_review.services.review_records import ReviewRecordManager

logger = structlog.get_logger(__name__)


class SkipReason(str, Enum):
    """Why the AI path declined to run. Not a failure."""

    MISSING_API_KEY = "missing_api_key"
    NO_TEXT_AVAILABLE = "no_text_available"


class AIReviewOutcome(BaseModel):
    """Result of one AI review run."""

    application_id: UUID
    status: str  # completed, skipped
    reason: Optional[SkipReason] = None
    rating: Optional[int] = None
    summary: Optional[str] = None
    version: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def skip(cls, application_id: UUID, reason: SkipReason) -> "AIReviewOutcome":
        return cls(application_id=application_id, status="skipped", reason=reason)


async def generate_ai_suggestion(
    db: AsyncSession,
    application_id: UUID,
    hints: Optional[Iterable[str]] = None,
    provider: Optional[AIProvider] = None,
) -> AIReviewOutcome:
    """
    Run the AI path for one application.

    Returns a skipped outcome when no credential is configured or the
    application has neither a cover letter nor extracted document text.

    Raises:
        NotFound: application or job missing
        InferenceError: the inference call failed or returned unparseable output
    """
    if provider is None:
        provider = get_ai_provider()
    if provider is None:
        logger.info("ai_review_skipped", application_id=str(application_id), reason=SkipReason.MISSING_API_KEY.value)
        return AIReviewOutcome.skip(application_id, SkipReason.MISSING_API_KEY)

    materials = await MaterialsAggregator(db).collect(application_id)

    if not materials.has_candidate_text:
        logger.info("ai_review_skipped", application_id=str(application_id), reason=SkipReason.NO_TEXT_AVAILABLE.value)
        return AIReviewOutcome.skip(application_id, SkipReason.NO_TEXT_AVAILABLE)

    prompt = build_review_prompt(materials, hints)
    suggestion = await provider.suggest_review(prompt)

    await ReviewRecordManager(db).record_ai_suggestion(application_id, suggestion)

    return AIReviewOutcome(
        application_id=application_id,
        status="completed",
        rating=suggestion.rating,
        summary=suggestion.summary,
        version=suggestion.version,
    )


async def run_ai_review_in_background(
    application_id: UUID,
    hints: Optional[List[str]] = None,
    session_factory=None,
) -> Optional[AIReviewOutcome]:
    """
    Fire-and-forget entry point for background tasks and workers.

    Opens its own session and commits on success. Failures are logged here and
    never re-raised, so they cannot affect the flow that dispatched the run.
    """
    if session_factory is None:
        from candidate_review.db.session import AsyncSessionLocal
        session_factory = AsyncSessionLocal

    async with session_factory() as db:
        try:
            outcome = await generate_ai_suggestion(db, application_id, hints=hints)
            await db.commit()
        except InferenceError as e:
            await db.rollback()
            logger.error("ai_review_inference_failed", application_id=str(application_id), error=e.message)
            return None
        except NotFound as e:
            await db.rollback()
            logger.warning("ai_review_application_missing", application_id=str(application_id), error=e.message)
            return None
        except Exception:
            await db.rollback()
            logger.exception("ai_review_failed", application_id=str(application_id))
            return None

    logger.info(
        "ai_review_finished",
        application_id=str(application_id),
        status=outcome.status,
        reason=outcome.reason.value if outcome.reason else None,
        rating=outcome.rating,
    )
    return outcome


def clamp_shortlist_count(count: Any, default: int, maximum: int) -> int:
    """Round a requested shortlist size into [1, maximum]; non-numbers fall back to default."""
    if count is None or isinstance(count, bool):
        return default
    try:
        value = float(count)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    return max(1, min(maximum, math.floor(value + 0.5)))


async def shortlist_applications(
    db: AsyncSession,
    job: Job,
    count: int,
    hints: Optional[Iterable[str]] = None,
    provider: Optional[AIProvider] = None,
) -> List[Dict[str, Any]]:
    """
    Run the AI path over a job's queue and return the best-rated applications.

    A failure for one application is logged and treated as "no rating"; it
    does not stop the others. Ties keep queue order.
    """
    hint_list = normalize_hints(hints)
    if provider is None:
        provider = get_ai_provider()

    entries = await QueueNavigator(db).ordered_queue(job.id)

    rated = []
    for entry in entries:
        # Failures happen before the review write, so nothing needs undoing
        try:
            outcome = await generate_ai_suggestion(db, entry.application_id, hints=hint_list, provider=provider)
        except (InferenceError, NotFound) as e:
            logger.warning("ai_shortlist_item_failed", application_id=str(entry.application_id), error=e.message)
            continue

        if outcome.rating is not None:
            rated.append(outcome)

    rated.sort(key=lambda outcome: outcome.rating, reverse=True)
    shortlist = rated[:count]

    seekers = {}
    if shortlist:
        result = await db.execute(
            select(Application)
            .options(selectinload(Application.job_seeker))
            .where(Application.id.in_([outcome.application_id for outcome in shortlist]))
        )
        seekers = {app.id: app.job_seeker for app in result.scalars().all()}

    logger.info("ai_shortlist_built", job_id=str(job.id), candidates=len(entries), rated=len(rated), returned=len(shortlist))
    return [
        {
            "application_id": outcome.application_id,
            "name": seekers[outcome.application_id].name if seekers.get(outcome.application_id) else None,
            "email": seekers[outcome.application_id].email if seekers.get(outcome.application_id) else None,
            "rating": outcome.rating,
            "summary": outcome.summary,
        }
        for outcome in shortlist
    ]
