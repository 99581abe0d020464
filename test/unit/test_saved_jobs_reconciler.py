from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from domain.models import AuthUser, BoardError, SaveAction
from domain.services import SavedJobsReconciler
from test.fixtures import make_mark, sample_jobs
from test.mocks import (
    FixedClock,
    InMemoryLogger,
    InMemorySavedJobRepository,
    SequentialIdGenerator,
)

USER = AuthUser(id="user-1", email="ada@example.com")


def _reconciler(
    repo: InMemorySavedJobRepository,
    *,
    discard_stale_loads: bool = False,
    logger: InMemoryLogger | None = None,
    signed_in: bool = True,
) -> SavedJobsReconciler:
    reconciler = SavedJobsReconciler(
        saved_repo=repo,
        id_generator=SequentialIdGenerator(),
        clock=FixedClock(datetime(2025, 6, 1, tzinfo=timezone.utc)),
        logger=logger or InMemoryLogger(),
        discard_stale_loads=discard_stale_loads,
    )
    if signed_in:
        reconciler.start_session(USER)
    return reconciler


# -- toggle: unsaved -> saved --------------------------------------------------

def test_toggle_saves_and_finalizes_with_store_confirmed_identity() -> None:
    repo = InMemorySavedJobRepository(id_prefix="srv-")
    reconciler = _reconciler(repo)

    result = asyncio.run(reconciler.toggle_save("job-1"))

    assert result.ok
    assert result.event is not None
    assert result.event.action is SaveAction.SAVED
    assert result.event.mark.id == "srv-save-1"
    assert reconciler.is_saved("job-1")
    assert [m.id for m in reconciler.saved_jobs] == ["srv-save-1"]
    assert repo.created[0].user_id == "user-1"


def test_toggle_is_visible_before_the_store_call_resolves() -> None:
    repo = InMemorySavedJobRepository()
    reconciler = _reconciler(repo)

    async def main() -> None:
        repo.hold()
        task = asyncio.create_task(reconciler.toggle_save("job-1"))
        await asyncio.sleep(0)
        assert reconciler.is_saved("job-1")
        assert repo.created == []
        repo.release()
        result = await task
        assert result.ok

    asyncio.run(main())
    assert reconciler.is_saved("job-1")


def test_failed_create_rolls_back_to_unsaved() -> None:
    repo = InMemorySavedJobRepository()
    repo.fail_create = True
    logger = InMemoryLogger()
    reconciler = _reconciler(repo, logger=logger)

    result = asyncio.run(reconciler.toggle_save("job-1"))

    assert result.error is BoardError.SAVE_FAILED
    assert result.event is None
    assert not reconciler.is_saved("job-1")
    assert reconciler.saved_count == 0
    assert "saved_job_create_failed" in logger.messages("error")


# -- toggle: saved -> unsaved --------------------------------------------------

def test_toggle_on_saved_job_deletes_the_mark() -> None:
    repo = InMemorySavedJobRepository([make_mark("m-1", "job-1")])
    reconciler = _reconciler(repo)

    async def main() -> None:
        await reconciler.load()
        result = await reconciler.toggle_save("job-1")
        assert result.event is not None
        assert result.event.action is SaveAction.UNSAVED

    asyncio.run(main())
    assert not reconciler.is_saved("job-1")
    assert repo.deleted == ["m-1"]


def test_failed_delete_restores_the_mark() -> None:
    repo = InMemorySavedJobRepository([make_mark("m-1", "job-1")])
    reconciler = _reconciler(repo)

    async def main() -> None:
        await reconciler.load()
        repo.fail_delete = True
        result = await reconciler.toggle_save("job-1")
        assert result.error is BoardError.UNSAVE_FAILED

    asyncio.run(main())
    assert reconciler.is_saved("job-1")
    assert [m.id for m in reconciler.saved_jobs] == ["m-1"]


def test_unsave_is_visible_before_the_delete_resolves() -> None:
    repo = InMemorySavedJobRepository([make_mark("m-1", "job-1")])
    reconciler = _reconciler(repo)

    async def main() -> None:
        await reconciler.load()
        repo.hold()
        task = asyncio.create_task(reconciler.toggle_save("job-1"))
        await asyncio.sleep(0)
        assert not reconciler.is_saved("job-1")
        repo.release()
        await task

    asyncio.run(main())


# -- rapid double toggles -----------------------------------------------------

def test_rapid_double_toggle_alternates_instead_of_creating_twice() -> None:
    repo = InMemorySavedJobRepository()
    reconciler = _reconciler(repo)

    async def main() -> None:
        repo.hold()
        first = asyncio.create_task(reconciler.toggle_save("job-1"))
        await asyncio.sleep(0)
        second = asyncio.create_task(reconciler.toggle_save("job-1"))
        await asyncio.sleep(0)
        assert not reconciler.is_saved("job-1")
        repo.release()
        results = await asyncio.gather(first, second)
        assert [r.event.action for r in results if r.event] == [
            SaveAction.SAVED,
            SaveAction.UNSAVED,
        ]

    asyncio.run(main())
    assert len(repo.created) == 1
    assert repo.deleted == [repo.created[0].id]
    assert not reconciler.is_saved("job-1")


# -- authentication gate -------------------------------------------------------

def test_toggle_without_user_is_rejected_without_mutation() -> None:
    repo = InMemorySavedJobRepository()
    reconciler = _reconciler(repo, signed_in=False)

    result = asyncio.run(reconciler.toggle_save("job-1"))

    assert result.error is BoardError.NOT_AUTHENTICATED
    assert reconciler.saved_count == 0
    assert repo.created == [] and repo.deleted == []


def test_toggle_after_session_end_is_rejected() -> None:
    repo = InMemorySavedJobRepository([make_mark("m-1", "job-1")])
    reconciler = _reconciler(repo)
    asyncio.run(reconciler.load())
    reconciler.end_session()

    result = asyncio.run(reconciler.toggle_save("job-1"))

    assert result.error is BoardError.NOT_AUTHENTICATED
    assert repo.deleted == []
    assert not reconciler.is_saved("job-1")


# -- loading -------------------------------------------------------------------

def test_load_replaces_snapshot_and_dedupes_per_job() -> None:
    repo = InMemorySavedJobRepository(
        [
            make_mark("m-1", "job-1"),
            make_mark("m-2", "job-2"),
            make_mark("m-3", "job-1", minutes=5),
        ]
    )
    logger = InMemoryLogger()
    reconciler = _reconciler(repo, logger=logger)

    result = asyncio.run(reconciler.load())

    assert result.ok and result.count == 2
    assert [m.id for m in reconciler.saved_jobs] == ["m-1", "m-2"]
    assert "saved_jobs_duplicates_dropped" in logger.messages("warning")


def test_load_ignores_marks_of_other_users() -> None:
    class LeakyRepo(InMemorySavedJobRepository):
        async def list_saved(self, user_id: str):
            return list(self.marks)

    repo = LeakyRepo([make_mark("m-1", "job-1", user_id="someone-else")])
    reconciler = _reconciler(repo)

    asyncio.run(reconciler.load())

    assert not reconciler.is_saved("job-1")


def test_load_failure_keeps_last_known_snapshot() -> None:
    repo = InMemorySavedJobRepository([make_mark("m-1", "job-1")])
    reconciler = _reconciler(repo)
    asyncio.run(reconciler.load())

    repo.fail_list = True
    result = asyncio.run(reconciler.load())

    assert result.error is BoardError.LOAD_FAILED
    assert reconciler.is_saved("job-1")


def test_late_load_overwrites_a_newer_toggle_by_default() -> None:
    repo = InMemorySavedJobRepository()
    reconciler = _reconciler(repo)

    async def main() -> None:
        repo.hold()
        load = asyncio.create_task(reconciler.load())
        await asyncio.sleep(0)
        toggle = asyncio.create_task(reconciler.toggle_save("job-1"))
        await asyncio.sleep(0)
        assert reconciler.is_saved("job-1")
        repo.release()
        await toggle
        await load

    asyncio.run(main())
    # The load snapshot predates the save, so last writer wins and hides it.
    assert not reconciler.is_saved("job-1")
    assert len(repo.created) == 1


def test_stale_load_is_discarded_when_versioning_is_enabled() -> None:
    repo = InMemorySavedJobRepository()
    reconciler = _reconciler(repo, discard_stale_loads=True)

    async def main() -> None:
        repo.hold()
        load = asyncio.create_task(reconciler.load())
        await asyncio.sleep(0)
        toggle = asyncio.create_task(reconciler.toggle_save("job-1"))
        await asyncio.sleep(0)
        repo.release()
        await toggle
        result = await load
        assert result.applied is False

    asyncio.run(main())
    assert reconciler.is_saved("job-1")


def test_load_finishing_after_session_end_is_not_applied() -> None:
    repo = InMemorySavedJobRepository([make_mark("m-1", "job-1")])
    reconciler = _reconciler(repo)

    async def main() -> None:
        repo.hold()
        load = asyncio.create_task(reconciler.load())
        await asyncio.sleep(0)
        reconciler.end_session()
        repo.release()
        result = await load
        assert result.applied is False

    asyncio.run(main())
    assert reconciler.saved_count == 0


# -- joined view -----------------------------------------------------------------

def test_saved_jobs_with_data_skips_marks_for_unloaded_jobs() -> None:
    repo = InMemorySavedJobRepository(
        [make_mark("m-1", "job-2"), make_mark("m-2", "job-gone")]
    )
    reconciler = _reconciler(repo)
    asyncio.run(reconciler.load())

    views = reconciler.saved_jobs_with_data(sample_jobs())

    assert [(v.mark.id, v.job.id) for v in views] == [("m-1", "job-2")]
