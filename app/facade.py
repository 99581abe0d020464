from __future__ import annotations

import asyncio
import urllib.parse
from dataclasses import dataclass
from typing import Sequence

from domain.models import (
    AppConfig,
    ApplicationType,
    AuthState,
    AuthUser,
    BoardError,
    FilterOptions,
    Job,
    JobDraft,
    JobFilters,
    SaveAction,
    SavedJobView,
    SaveResult,
)
from domain.ports import (
    AuthProviderPort,
    ClockPort,
    IdGeneratorPort,
    JobRepositoryPort,
    LoggerPort,
    NotifierPort,
    SavedJobRepositoryPort,
    Unsubscribe,
)
from domain.services import (
    JobBoard,
    JobPostingService,
    JobPostingValidationError,
    NotAuthenticatedError,
    SavedJobsReconciler,
)
from domain.utils import format_salary


@dataclass(frozen=True)
class JobDetails:
    job: Job
    is_saved: bool
    salary_text: str
    apply_target: str | None


class JobBoardFacade:
    """
    UI-facing session context for the job board.

    Follows the auth provider: a signed-in user starts a session and
    loads jobs and saved jobs; signing out tears the session down so
    results of calls still in flight are dropped.
    """

    def __init__(
        self,
        *,
        auth: AuthProviderPort,
        job_repo: JobRepositoryPort,
        saved_repo: SavedJobRepositoryPort,
        notifier: NotifierPort,
        clock: ClockPort,
        id_generator: IdGeneratorPort,
        logger: LoggerPort,
        config: AppConfig | None = None,
    ) -> None:
        config = config or AppConfig()
        self._auth = auth
        self._notifier = notifier
        self._logger = logger
        self._board = JobBoard(
            job_repo=job_repo,
            logger=logger,
            list_limit=config.list_limit,
        )
        self._saved = SavedJobsReconciler(
            saved_repo=saved_repo,
            id_generator=id_generator,
            clock=clock,
            logger=logger,
            discard_stale_loads=config.discard_stale_loads,
        )
        self._posting = JobPostingService(
            job_repo=job_repo,
            id_generator=id_generator,
            clock=clock,
            logger=logger,
        )
        self._unsubscribe: Unsubscribe | None = None
        self._is_loading = True

    # -- lifecycle ----------------------------------------------------------

    async def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.subscribe(self.handle_auth_state)
        await self.handle_auth_state(self._auth.current_state())

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._teardown()

    async def handle_auth_state(self, state: AuthState) -> None:
        self._is_loading = state.is_loading
        current = self._saved.user
        if state.user is None:
            if current is not None:
                self._teardown()
            return
        if current is not None and current.id == state.user.id:
            return
        if current is not None:
            self._teardown()

        self._saved.start_session(state.user)
        self._logger.info("session_started", user_id=state.user.id)
        await self.refresh()

    async def refresh(self) -> None:
        jobs_result, saved_result = await asyncio.gather(
            self._board.load_jobs(),
            self._saved.load(),
        )
        if jobs_result.error is BoardError.LOAD_FAILED:
            await self._notifier.notify("Error", "Failed to load jobs", destructive=True)
        if saved_result.error is BoardError.LOAD_FAILED:
            await self._notifier.notify("Error", "Failed to load saved jobs", destructive=True)

    async def sign_out(self) -> None:
        await self._auth.sign_out()

    def _teardown(self) -> None:
        user = self._saved.user
        self._saved.end_session()
        self._board.reset()
        if user is not None:
            self._logger.info("session_ended", user_id=user.id)

    # -- views --------------------------------------------------------------

    @property
    def user(self) -> AuthUser | None:
        return self._saved.user

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def board(self) -> JobBoard:
        return self._board

    @property
    def filters(self) -> JobFilters:
        return self._board.filters

    @property
    def visible_jobs(self) -> list[Job]:
        return self._board.visible_jobs

    @property
    def filter_options(self) -> FilterOptions:
        return self._board.filter_options

    @property
    def saved_count(self) -> int:
        return self._saved.saved_count

    def saved_jobs(self) -> Sequence[SavedJobView]:
        return self._saved.saved_jobs_with_data(self._board.jobs)

    def is_saved(self, job_id: str) -> bool:
        return self._saved.is_saved(job_id)

    def job_details(self, job_id: str) -> JobDetails | None:
        job = self._board.get(job_id)
        if job is None:
            return None
        return JobDetails(
            job=job,
            is_saved=self._saved.is_saved(job.id),
            salary_text=format_salary(job.salary_min, job.salary_max, job.salary_currency),
            apply_target=self._apply_target(job),
        )

    # -- commands -----------------------------------------------------------

    def set_query(self, value: str) -> None:
        self._board.set_query(value)

    def set_location(self, value: str) -> None:
        self._board.set_location(value)

    def set_employment_type(self, value: str) -> None:
        self._board.set_employment_type(value)

    def set_experience_level(self, value: str) -> None:
        self._board.set_experience_level(value)

    def set_salary_min(self, value: str) -> None:
        self._board.set_salary_min(value)

    def apply_filters(self, filters: JobFilters) -> None:
        self._board.apply_filters(filters)

    def clear_filters(self) -> None:
        self._board.clear_filters()

    async def toggle_save(self, job_id: str) -> SaveResult:
        session = self._saved.session
        result = await self._saved.toggle_save(job_id)
        if session != self._saved.session:
            self._logger.info("saved_job_toggle_unreported", job_id=job_id, reason="session_ended")
            return result
        if result.event is not None and result.event.action is SaveAction.SAVED:
            await self._notifier.notify("Job saved", "Job added to saved jobs")
        elif result.event is not None:
            await self._notifier.notify("Job unsaved", "Job removed from saved jobs")
        elif result.error is BoardError.NOT_AUTHENTICATED:
            await self._notifier.notify("Error", "Sign in to save jobs", destructive=True)
        else:
            await self._notifier.notify("Error", "Failed to save job", destructive=True)
        return result

    async def post_job(self, draft: JobDraft) -> Job | None:
        session = self._saved.session
        try:
            job = await self._posting.post_job(self._saved.user, draft)
        except (NotAuthenticatedError, JobPostingValidationError) as exc:
            await self._notifier.notify("Error", str(exc), destructive=True)
            return None
        except Exception as exc:
            self._logger.error("job_post_failed", error=str(exc), title=draft.title)
            await self._notifier.notify(
                "Error",
                "Failed to post job. Please try again.",
                destructive=True,
            )
            return None

        # The job is stored either way; a torn-down board must stay empty.
        if session != self._saved.session:
            self._logger.info("job_post_reload_skipped", job_id=job.id, reason="session_ended")
            return job
        await self._board.load_jobs()
        await self._notifier.notify("Success", "Job posted successfully!")
        return job

    @staticmethod
    def _apply_target(job: Job) -> str | None:
        if job.application_type is ApplicationType.EMAIL and job.application_email:
            subject = urllib.parse.quote(f"Application for {job.title} at {job.company}")
            return f"mailto:{job.application_email}?subject={subject}"
        if job.application_type is ApplicationType.LINK and job.application_link:
            return job.application_link
        return None
