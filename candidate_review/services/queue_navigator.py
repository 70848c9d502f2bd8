"""
Queue Navigator
Orders a job's applications (created_at ascending, id as tie-break) and
resolves an application's position and neighbours. Recomputed on every call.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_review.models.application import Application, ApplicationStatus


@dataclass(frozen=True)
class QueueEntry:
    """One application in a job's queue."""

    application_id: UUID
    status: str
    created_at: datetime


@dataclass(frozen=True)
class QueuePosition:
    """Where an application sits in its job's queue."""

    position: Optional[int]  # 1-based; None when not in this queue
    total: int
    previous_application_id: Optional[UUID]
    next_application_id: Optional[UUID]


def locate_in_queue(entries: Sequence[QueueEntry], application_id: UUID) -> QueuePosition:
    """Position and neighbours of ``application_id`` within ``entries``."""
    total = len(entries)
    index = next((i for i, entry in enumerate(entries) if entry.application_id == application_id), None)

    if index is None:
        return QueuePosition(position=None, total=total, previous_application_id=None, next_application_id=None)

    previous_id = entries[index - 1].application_id if index > 0 else None
    next_id = entries[index + 1].application_id if index + 1 < total else None
    return QueuePosition(
        position=index + 1,
        total=total,
        previous_application_id=previous_id,
        next_application_id=next_id,
    )


def next_unreviewed_after(entries: Sequence[QueueEntry], application_id: UUID) -> Optional[UUID]:
    """First still-pending application after ``application_id``, or None."""
    index = next((i for i, entry in enumerate(entries) if entry.application_id == application_id), None)
    if index is None:
        return None

    for entry in entries[index + 1:]:
        if entry.status == ApplicationStatus.PENDING.value:
            return entry.application_id
    return None


class QueueNavigator:
    """Loads job queues from the store."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ordered_queue(self, job_id: UUID) -> List[QueueEntry]:
        """All applications for the job in stable queue order."""
        result = await self.db.execute(
            select(Application.id, Application.status, Application.created_at)
            .where(Application.job_id == job_id)
            .order_by(Application.created_at.asc(), Application.id.asc())
        )
        return [
            QueueEntry(application_id=row.id, status=row.status, created_at=row.created_at)
            for row in result.all()
        ]

    async def locate(self, job_id: UUID, application_id: UUID) -> QueuePosition:
        """Position of the application in its job's current queue."""
        entries = await self.ordered_queue(job_id)
        return locate_in_queue(entries, application_id)
