from __future__ import annotations

from typing import Iterable, Sequence

from domain.models import FilterOptions, Job, JobFilters

SALARY_THRESHOLDS: tuple[int, ...] = (30000, 50000, 70000, 100000, 150000, 200000)


def compute_visible(jobs: Sequence[Job], filters: JobFilters) -> list[Job]:
    """
    Return the jobs that pass every active predicate, in input order.

    The store already returns jobs newest first, so no sorting happens here.
    """
    if filters.is_empty:
        return list(jobs)
    threshold = _parse_threshold(filters.salary_min)
    needle = filters.query.lower()
    return [job for job in jobs if _matches(job, filters, needle, threshold)]


def matches(job: Job, filters: JobFilters) -> bool:
    return _matches(job, filters, filters.query.lower(), _parse_threshold(filters.salary_min))


def filter_options(jobs: Sequence[Job]) -> FilterOptions:
    return FilterOptions(
        locations=_distinct_sorted(job.location for job in jobs),
        employment_types=_distinct_sorted(job.employment_type for job in jobs),
        experience_levels=_distinct_sorted(job.experience_level for job in jobs),
    )


def _matches(job: Job, filters: JobFilters, needle: str, threshold: int | None) -> bool:
    if needle and not _matches_text(job, needle):
        return False
    if filters.location and job.location != filters.location:
        return False
    if filters.employment_type and job.employment_type != filters.employment_type:
        return False
    if filters.experience_level and job.experience_level != filters.experience_level:
        return False
    if filters.salary_min:
        # Jobs that only advertise a maximum never pass a minimum-salary filter.
        if threshold is None or job.salary_min is None:
            return False
        if job.salary_min < threshold:
            return False
    return True


def _matches_text(job: Job, needle: str) -> bool:
    if needle in job.title.lower():
        return True
    if needle in job.company.lower():
        return True
    if needle in job.description.lower():
        return True
    return any(needle in tag.lower() for tag in job.tags)


def _parse_threshold(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _distinct_sorted(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(values)))
