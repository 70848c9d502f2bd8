"""Tests for the per-business review bookmark."""

from sqlalchemy import delete, func, select

from candidate_review.models import Application, Job, ReviewProgress
from candidate_review.services.progress_tracker import ProgressTracker
from candidate_review.services.queue_navigator import QueuePosition
from candidate_review.services.review_records import ReviewRecordManager


def position(n, total=3):
    return QueuePosition(position=n, total=total, previous_application_id=None, next_application_id=None)


async def test_first_save_creates_bookmark(db, review_queue):
    tracker = ProgressTracker(db)

    progress = await tracker.record_manual_save(
        review_queue.job.id, review_queue.business.id, review_queue.a2.id, position(2)
    )
    await db.commit()

    assert progress.reviewed_count == 2
    assert progress.total_applications == 3
    assert progress.last_reviewed_application_id == review_queue.a2.id
    assert progress.resumed_at is not None


async def test_later_save_updates_same_row(db, review_queue):
    tracker = ProgressTracker(db)
    job_id, business_id = review_queue.job.id, review_queue.business.id

    await tracker.record_manual_save(job_id, business_id, review_queue.a3.id, position(3))
    progress = await tracker.record_manual_save(job_id, business_id, review_queue.a1.id, position(1))
    await db.commit()

    # Count follows the saved position, even when moving backwards
    assert progress.reviewed_count == 1
    assert progress.last_reviewed_application_id == review_queue.a1.id

    rows = await db.execute(
        select(func.count()).select_from(ReviewProgress).where(
            ReviewProgress.job_id == job_id, ReviewProgress.business_id == business_id
        )
    )
    assert rows.scalar_one() == 1


async def test_unpositioned_save_counts_whole_queue(db, review_queue):
    progress = await ProgressTracker(db).record_manual_save(
        review_queue.job.id,
        review_queue.business.id,
        review_queue.a1.id,
        QueuePosition(position=None, total=3, previous_application_id=None, next_application_id=None),
    )

    assert progress.reviewed_count == 3


async def test_overview_without_progress_starts_at_first(db, review_queue):
    overview = await ProgressTracker(db).job_overview(review_queue.job, review_queue.business.id)

    assert overview["job"] == {"id": review_queue.job.id, "title": "Backend Engineer"}
    assert [item["id"] for item in overview["queue"]] == [review_queue.a1.id, review_queue.a2.id, review_queue.a3.id]
    assert [item["position"] for item in overview["queue"]] == [1, 2, 3]
    assert overview["queue"][0]["job_seeker"]["name"] == "Candidate 1"

    summary = overview["summary"]
    assert summary["total_applications"] == 3
    assert summary["reviewed_count"] == 0
    assert summary["last_reviewed_application_id"] is None
    assert summary["next_application_id"] == review_queue.a1.id
    assert summary["needs_reconciliation"] is False


async def test_overview_resumes_after_bookmark(db, review_queue):
    await ReviewRecordManager(db).save_manual_review(review_queue.a2.id, review_queue.business.id, 5, "Hire")
    await ProgressTracker(db).record_manual_save(
        review_queue.job.id, review_queue.business.id, review_queue.a2.id, position(2)
    )
    await db.commit()

    overview = await ProgressTracker(db).job_overview(review_queue.job, review_queue.business.id)

    assert overview["summary"]["reviewed_count"] == 2
    assert overview["summary"]["last_reviewed_application_id"] == review_queue.a2.id
    assert overview["summary"]["next_application_id"] == review_queue.a3.id
    assert overview["queue"][1]["manual_rating"] == 5
    assert overview["queue"][1]["status"] == "reviewed"


async def test_bookmark_on_last_application_wraps(db, review_queue):
    await ProgressTracker(db).record_manual_save(
        review_queue.job.id, review_queue.business.id, review_queue.a3.id, position(3)
    )

    overview = await ProgressTracker(db).job_overview(review_queue.job, review_queue.business.id)

    assert overview["summary"]["next_application_id"] == review_queue.a1.id


async def test_progress_is_per_business(db, review_queue):
    await ProgressTracker(db).record_manual_save(
        review_queue.job.id, review_queue.business.id, review_queue.a2.id, position(2)
    )

    overview = await ProgressTracker(db).job_overview(review_queue.job, review_queue.other_business.id)

    assert overview["summary"]["reviewed_count"] == 0


async def test_shrunken_queue_is_flagged_not_rewritten(db, review_queue):
    tracker = ProgressTracker(db)
    await tracker.record_manual_save(review_queue.job.id, review_queue.business.id, review_queue.a3.id, position(3))
    await db.commit()

    await db.execute(delete(Application).where(Application.id.in_([review_queue.a2.id, review_queue.a3.id])))
    await db.commit()

    overview = await tracker.job_overview(review_queue.job, review_queue.business.id)

    assert overview["summary"]["total_applications"] == 1
    assert overview["summary"]["reviewed_count"] == 3
    assert overview["summary"]["needs_reconciliation"] is True
    assert overview["summary"]["next_application_id"] == review_queue.a1.id


async def test_empty_job_overview(db, review_queue):
    job = Job(title="Designer", description="Make it pretty.", business_id=review_queue.business.id)
    db.add(job)
    await db.commit()

    overview = await ProgressTracker(db).job_overview(job, review_queue.business.id)

    assert overview["queue"] == []
    assert overview["summary"]["total_applications"] == 0
    assert overview["summary"]["next_application_id"] is None
    assert overview["summary"]["needs_reconciliation"] is False
