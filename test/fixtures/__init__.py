"""Job and saved-mark builders shared by unit, integration and BDD tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from domain.models import Job, SavedJob

BASE_TIME = datetime(2025, 6, 1, tzinfo=timezone.utc)


def make_job(job_id: str = "job-a", **overrides: object) -> Job:
    defaults: dict = dict(
        id=job_id,
        title="Backend Engineer",
        company="Acme",
        location="Remote",
        description="Build APIs for our platform.",
        employment_type="Full-time",
        experience_level="Mid",
        user_id="poster-1",
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
    defaults.update(overrides)
    return Job(**defaults)


def make_mark(
    mark_id: str,
    job_id: str,
    user_id: str = "user-1",
    minutes: int = 0,
) -> SavedJob:
    return SavedJob(
        id=mark_id,
        user_id=user_id,
        job_id=job_id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def sample_jobs() -> list[Job]:
    """A small board, newest first as the store returns it."""
    return [
        make_job(
            "job-1",
            title="Senior Frontend Engineer",
            company="Pixel Labs",
            location="Berlin",
            description="Own our design system.",
            employment_type="Full-time",
            experience_level="Senior",
            salary_min=90000,
            salary_max=120000,
            salary_currency="EUR",
            tags=("React", "TypeScript"),
            created_at=BASE_TIME + timedelta(days=4),
        ),
        make_job(
            "job-2",
            title="Data Analyst",
            company="Numbers Co",
            location="Remote",
            description="Dashboards and SQL.",
            employment_type="Contract",
            experience_level="Mid",
            salary_max=60000,
            tags=("SQL",),
            created_at=BASE_TIME + timedelta(days=3),
        ),
        make_job(
            "job-3",
            title="Platform Engineer",
            company="Cloudy",
            location="Berlin",
            description="Kubernetes and Terraform, some react on the side.",
            employment_type="Full-time",
            experience_level="Mid",
            salary_min=50000,
            tags=("Go", "Kubernetes"),
            created_at=BASE_TIME + timedelta(days=2),
        ),
        make_job(
            "job-4",
            title="Junior Developer",
            company="Startup",
            location="Lisbon",
            description="Learn by shipping.",
            employment_type="Part-time",
            experience_level="Entry",
            created_at=BASE_TIME + timedelta(days=1),
        ),
    ]
