"""Celery application for out-of-request AI reviews."""

from celery import Celery

from candidate_review.config import settings

celery_app = Celery(
    "candidate_review",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["candidate_review.workers.ai_review"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    # A review is one inference call; leave headroom above AI_REQUEST_TIMEOUT
    task_soft_time_limit=int(settings.AI_REQUEST_TIMEOUT) + 30,
    task_time_limit=int(settings.AI_REQUEST_TIMEOUT) + 60,
    # Acknowledge only after the review has been written
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=1000,
)
