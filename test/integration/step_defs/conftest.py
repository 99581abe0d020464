"""Shared fixtures and context for BDD step definitions."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest

from app import JobBoardFacade
from domain.models import AuthUser, SaveResult
from test.mocks import (
    FakeAuthProvider,
    FixedClock,
    InMemoryJobRepository,
    InMemoryLogger,
    InMemorySavedJobRepository,
    RecordingNotifier,
    SequentialIdGenerator,
)


@dataclass
class BoardContext:
    """Holds mutable state shared across BDD steps."""

    user: AuthUser | None = None
    auth: FakeAuthProvider = field(default_factory=FakeAuthProvider)
    job_repo: InMemoryJobRepository = field(default_factory=InMemoryJobRepository)
    saved_repo: InMemorySavedJobRepository = field(default_factory=InMemorySavedJobRepository)
    notifier: RecordingNotifier = field(default_factory=RecordingNotifier)
    logger: InMemoryLogger = field(default_factory=InMemoryLogger)
    facade: JobBoardFacade | None = None
    results: list[SaveResult] = field(default_factory=list)


@pytest.fixture()
def ctx() -> BoardContext:
    return BoardContext()


def started_facade(ctx: BoardContext) -> JobBoardFacade:
    """Build the facade on first use and run its session start."""
    if ctx.facade is None:
        ctx.auth = FakeAuthProvider(user=ctx.user)
        ctx.facade = JobBoardFacade(
            auth=ctx.auth,
            job_repo=ctx.job_repo,
            saved_repo=ctx.saved_repo,
            notifier=ctx.notifier,
            clock=FixedClock(datetime(2025, 6, 1, tzinfo=timezone.utc)),
            id_generator=SequentialIdGenerator(),
            logger=ctx.logger,
        )
        asyncio.run(ctx.facade.start())
    return ctx.facade
