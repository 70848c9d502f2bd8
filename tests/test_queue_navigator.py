"""Tests for queue ordering and position lookup."""

import uuid
from datetime import datetime

from candidate_review.models import Application
from candidate_review.services.queue_navigator import (
    QueueEntry,
    QueueNavigator,
    locate_in_queue,
    next_unreviewed_after,
)


def entry(n: int, status: str = "pending") -> QueueEntry:
    return QueueEntry(application_id=uuid.UUID(int=n), status=status, created_at=datetime(2026, 10, 19, 9, n))


class TestLocateInQueue:
    def test_middle_entry(self):
        entries = [entry(1), entry(2), entry(3)]

        position = locate_in_queue(entries, uuid.UUID(int=2))

        assert position.position == 2
        assert position.total == 3
        assert position.previous_application_id == uuid.UUID(int=1)
        assert position.next_application_id == uuid.UUID(int=3)

    def test_edges_have_no_neighbour(self):
        entries = [entry(1), entry(2)]

        first = locate_in_queue(entries, uuid.UUID(int=1))
        last = locate_in_queue(entries, uuid.UUID(int=2))

        assert first.previous_application_id is None
        assert last.next_application_id is None

    def test_unknown_application(self):
        position = locate_in_queue([entry(1)], uuid.UUID(int=9))

        assert position.position is None
        assert position.total == 1
        assert position.previous_application_id is None
        assert position.next_application_id is None

    def test_neighbours_are_consistent(self):
        entries = [entry(n) for n in range(1, 6)]

        for current in entries:
            here = locate_in_queue(entries, current.application_id)
            if here.next_application_id is not None:
                after = locate_in_queue(entries, here.next_application_id)
                assert after.previous_application_id == current.application_id
                assert after.position == here.position + 1


class TestNextUnreviewed:
    def test_skips_reviewed_entries(self):
        entries = [entry(1), entry(2), entry(3, "reviewed"), entry(4)]

        assert next_unreviewed_after(entries, uuid.UUID(int=2)) == uuid.UUID(int=4)

    def test_does_not_wrap_around(self):
        entries = [entry(1), entry(2, "reviewed"), entry(3)]

        assert next_unreviewed_after(entries, uuid.UUID(int=3)) is None

    def test_unknown_current(self):
        assert next_unreviewed_after([entry(1)], uuid.UUID(int=7)) is None


async def test_queue_is_ordered_by_creation_time(db, review_queue):
    navigator = QueueNavigator(db)

    entries = await navigator.ordered_queue(review_queue.job.id)

    assert [e.application_id for e in entries] == [review_queue.a1.id, review_queue.a2.id, review_queue.a3.id]


async def test_locate_middle_application(db, review_queue):
    position = await QueueNavigator(db).locate(review_queue.job.id, review_queue.a2.id)

    assert position.position == 2
    assert position.total == 3
    assert position.previous_application_id == review_queue.a1.id
    assert position.next_application_id == review_queue.a3.id


async def test_equal_timestamps_fall_back_to_id(db, review_queue):
    twin_time = review_queue.a3.created_at
    low = Application(
        id=uuid.UUID(int=1),
        job_id=review_queue.job.id,
        job_seeker_id=review_queue.seekers[0].id,
        created_at=twin_time,
    )
    high = Application(
        id=uuid.UUID("ffffffff-ffff-ffff-ffff-ffffffffffff"),
        job_id=review_queue.job.id,
        job_seeker_id=review_queue.seekers[1].id,
        created_at=twin_time,
    )
    db.add_all([high, low])
    await db.commit()

    entries = await QueueNavigator(db).ordered_queue(review_queue.job.id)
    tail = [e.application_id for e in entries if e.created_at == twin_time]

    assert tail == sorted(tail, key=str)
    assert tail.index(low.id) < tail.index(high.id)
    assert len(entries) == 5


async def test_application_from_other_job_is_not_located(db, review_queue):
    position = await QueueNavigator(db).locate(uuid.uuid4(), review_queue.a1.id)

    assert position.position is None
    assert position.total == 0
