from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from domain.models import BoardError, FilterOptions, Job, JobFilters, LoadResult
from domain.ports import JobRepositoryPort, LoggerPort
from domain.services.filtering import compute_visible, filter_options


class JobBoard:
    """
    Loaded jobs plus the user's current filters.

    Derived views are recomputed from state on every read so they can
    never lag behind the job snapshot or the filters.
    """

    def __init__(
        self,
        *,
        job_repo: JobRepositoryPort,
        logger: LoggerPort,
        list_limit: int = 100,
    ) -> None:
        self._job_repo = job_repo
        self._logger = logger
        self._list_limit = list_limit
        self._jobs: tuple[Job, ...] = ()
        self._filters = JobFilters()
        self._generation = 0

    @property
    def jobs(self) -> Sequence[Job]:
        return self._jobs

    @property
    def filters(self) -> JobFilters:
        return self._filters

    @property
    def visible_jobs(self) -> list[Job]:
        return compute_visible(self._jobs, self._filters)

    @property
    def filter_options(self) -> FilterOptions:
        return filter_options(self._jobs)

    @property
    def result_summary(self) -> str:
        shown = len(self.visible_jobs)
        plural = "" if shown == 1 else "s"
        return f"{shown} Job{plural} Found. Showing {shown} of {len(self._jobs)} total jobs"

    def get(self, job_id: str) -> Job | None:
        for job in self._jobs:
            if job.id == job_id:
                return job
        return None

    async def load_jobs(self) -> LoadResult:
        generation = self._generation
        try:
            jobs = await self._job_repo.list_jobs(limit=self._list_limit)
        except Exception as exc:
            self._logger.error("job_list_load_failed", error=str(exc))
            return LoadResult(count=len(self._jobs), error=BoardError.LOAD_FAILED)

        if generation != self._generation:
            self._logger.info("job_list_load_discarded", reason="board_reset")
            return LoadResult(count=len(jobs), applied=False)
        self._jobs = tuple(jobs)
        self._logger.info("job_list_loaded", count=len(self._jobs))
        return LoadResult(count=len(self._jobs))

    # -- filters ------------------------------------------------------------

    def set_query(self, value: str) -> None:
        self._filters = replace(self._filters, query=value)

    def set_location(self, value: str) -> None:
        self._filters = replace(self._filters, location=value)

    def set_employment_type(self, value: str) -> None:
        self._filters = replace(self._filters, employment_type=value)

    def set_experience_level(self, value: str) -> None:
        self._filters = replace(self._filters, experience_level=value)

    def set_salary_min(self, value: str) -> None:
        self._filters = replace(self._filters, salary_min=value)

    def apply_filters(self, filters: JobFilters) -> None:
        self._filters = filters

    def clear_filters(self) -> None:
        self._filters = JobFilters()

    def reset(self) -> None:
        """Drop all state; loads still in flight will not be applied."""
        self._generation += 1
        self._jobs = ()
        self._filters = JobFilters()
