"""Shared fixtures: a throwaway SQLite store, a seeded review queue and a stub AI provider."""

from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import List, Optional

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from candidate_review import models  # noqa: F401  (registers tables)
from candidate_review.db.base import Base
from candidate_review.models import Application, Job, User
from candidate_review.services.ai.base import AIProvider

QUEUE_START = datetime(2026, 10, 19, 9, 0)


class StubProvider(AIProvider):
    """In-memory provider that records prompts and replays a canned reply or error."""

    name = "stub"
    model = "stub-model-1"

    def __init__(self, content: Optional[str] = '{"rating": 4, "summary": "Solid match."}', error: Exception = None):
        self.content = content
        self.error = error
        self.prompts: List[str] = []

    async def complete_json(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'review.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def review_queue(db):
    """Job J owned by a business, with applications A1 09:00, A2 09:05, A3 09:10."""
    business = User(email="owner@acme.test", name="Acme Hiring", user_type="business")
    other_business = User(email="owner@globex.test", name="Globex", user_type="business")
    seekers = [
        User(email=f"candidate{i}@mail.test", name=f"Candidate {i}", user_type="jobseeker")
        for i in range(1, 4)
    ]
    db.add_all([business, other_business, *seekers])
    await db.flush()

    job = Job(
        title="Backend Engineer",
        description="Build and run our hiring APIs.",
        requirements="Python, SQL, 3+ years",
        business_id=business.id,
    )
    db.add(job)
    await db.flush()

    applications = [
        Application(
            job_id=job.id,
            job_seeker_id=seeker.id,
            cover_letter=f"I have shipped Python services for {index + 2} years.",
            created_at=QUEUE_START + timedelta(minutes=5 * index),
        )
        for index, seeker in enumerate(seekers)
    ]
    db.add_all(applications)
    await db.commit()

    return SimpleNamespace(
        business=business,
        other_business=other_business,
        seekers=seekers,
        job=job,
        a1=applications[0],
        a2=applications[1],
        a3=applications[2],
    )


@pytest.fixture
def stub_provider():
    return StubProvider()
