from __future__ import annotations

from typing import Iterable, Sequence

from domain.models import (
    AuthUser,
    BoardError,
    Job,
    LoadResult,
    SaveAction,
    SavedJob,
    SavedJobView,
    SaveEvent,
    SaveResult,
)
from domain.ports import ClockPort, IdGeneratorPort, LoggerPort, SavedJobRepositoryPort


class SavedJobsReconciler:
    """
    Keeps the signed-in user's saved jobs in sync with the saved-job store.

    Toggles are applied locally before the store is called and rolled back
    if the store call fails. Local state is changed before the first
    ``await`` of a toggle, so a second toggle on the same job always sees
    the optimistic state and the two alternate instead of racing.

    A bulk ``load()`` replaces the whole snapshot. By default a load that
    resolves after a toggle wins and may undo that toggle locally. With
    ``discard_stale_loads=True`` every toggle bumps a version counter and a
    load that started before the latest toggle is ignored.
    """

    def __init__(
        self,
        *,
        saved_repo: SavedJobRepositoryPort,
        id_generator: IdGeneratorPort,
        clock: ClockPort,
        logger: LoggerPort,
        discard_stale_loads: bool = False,
    ) -> None:
        self._saved_repo = saved_repo
        self._id_generator = id_generator
        self._clock = clock
        self._logger = logger
        self._discard_stale_loads = discard_stale_loads

        self._user: AuthUser | None = None
        self._marks: dict[str, SavedJob] = {}
        self._session = 0
        self._version = 0

    # -- session lifecycle --------------------------------------------------

    def start_session(self, user: AuthUser) -> None:
        self._session += 1
        self._user = user
        self._marks = {}

    def end_session(self) -> None:
        self._session += 1
        self._user = None
        self._marks = {}

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def session(self) -> int:
        """Changes on every session start and end."""
        return self._session

    # -- queries ------------------------------------------------------------

    def is_saved(self, job_id: str) -> bool:
        return job_id in self._marks

    @property
    def saved_jobs(self) -> Sequence[SavedJob]:
        return tuple(self._marks.values())

    @property
    def saved_count(self) -> int:
        return len(self._marks)

    def saved_jobs_with_data(self, jobs: Iterable[Job]) -> list[SavedJobView]:
        """Join marks with loaded jobs; marks for jobs not loaded are skipped."""
        by_id = {job.id: job for job in jobs}
        views = []
        for mark in self._marks.values():
            job = by_id.get(mark.job_id)
            if job is not None:
                views.append(SavedJobView(mark=mark, job=job))
        return views

    # -- commands -----------------------------------------------------------

    async def load(self) -> LoadResult:
        user = self._user
        if user is None:
            return LoadResult(error=BoardError.NOT_AUTHENTICATED)

        session = self._session
        version = self._version
        try:
            marks = await self._saved_repo.list_saved(user.id)
        except Exception as exc:
            self._logger.error("saved_jobs_load_failed", user_id=user.id, error=str(exc))
            return LoadResult(count=len(self._marks), error=BoardError.LOAD_FAILED)

        if session != self._session:
            self._logger.info("saved_jobs_load_discarded", user_id=user.id, reason="session_ended")
            return LoadResult(count=len(marks), applied=False)
        if self._discard_stale_loads and version != self._version:
            self._logger.info("saved_jobs_load_discarded", user_id=user.id, reason="stale")
            return LoadResult(count=len(marks), applied=False)

        self._marks = self._unique_marks(marks, user.id)
        self._logger.info("saved_jobs_loaded", user_id=user.id, count=len(self._marks))
        return LoadResult(count=len(self._marks))

    async def toggle_save(self, job_id: str) -> SaveResult:
        user = self._user
        if user is None:
            self._logger.warning(
                "saved_job_toggle_rejected",
                job_id=job_id,
                reason="not_authenticated",
            )
            return SaveResult(error=BoardError.NOT_AUTHENTICATED)

        self._version += 1
        existing = self._marks.get(job_id)
        if existing is None:
            return await self._save(user, job_id)
        return await self._unsave(existing)

    async def _save(self, user: AuthUser, job_id: str) -> SaveResult:
        session = self._session
        pending = SavedJob(
            id=self._id_generator.new_saved_job_id(),
            user_id=user.id,
            job_id=job_id,
            created_at=self._clock.now(),
        )
        self._marks[job_id] = pending

        try:
            confirmed = await self._saved_repo.create_saved(pending)
        except Exception as exc:
            if session == self._session and self._marks.get(job_id) is pending:
                del self._marks[job_id]
            self._logger.error(
                "saved_job_create_failed",
                job_id=job_id,
                user_id=user.id,
                error=str(exc),
            )
            return SaveResult(error=BoardError.SAVE_FAILED)

        if session == self._session and self._marks.get(job_id) is pending:
            self._marks[job_id] = confirmed
        self._logger.info("saved_job_created", job_id=job_id, mark_id=confirmed.id)
        return SaveResult(event=SaveEvent(job_id=job_id, action=SaveAction.SAVED, mark=confirmed))

    async def _unsave(self, mark: SavedJob) -> SaveResult:
        session = self._session
        del self._marks[mark.job_id]

        try:
            await self._saved_repo.delete_saved(mark.id)
        except Exception as exc:
            if session == self._session and mark.job_id not in self._marks:
                self._marks[mark.job_id] = mark
            self._logger.error(
                "saved_job_delete_failed",
                job_id=mark.job_id,
                mark_id=mark.id,
                error=str(exc),
            )
            return SaveResult(error=BoardError.UNSAVE_FAILED)

        self._logger.info("saved_job_deleted", job_id=mark.job_id, mark_id=mark.id)
        return SaveResult(event=SaveEvent(job_id=mark.job_id, action=SaveAction.UNSAVED, mark=mark))

    def _unique_marks(self, marks: Iterable[SavedJob], user_id: str) -> dict[str, SavedJob]:
        unique: dict[str, SavedJob] = {}
        duplicates = 0
        for mark in marks:
            if mark.user_id != user_id:
                continue
            if mark.job_id in unique:
                duplicates += 1
                continue
            unique[mark.job_id] = mark
        if duplicates:
            self._logger.warning("saved_jobs_duplicates_dropped", user_id=user_id, count=duplicates)
        return unique
