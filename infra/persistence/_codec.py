from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from domain.models import ApplicationType, Job, SavedJob

from ._datetime import EPOCH, dt_to_iso, iso_to_dt


def tags_to_text(tags: Sequence[str]) -> str:
    return json.dumps(list(tags))


def text_to_tags(raw: object) -> tuple[str, ...]:
    """Parse the stored tag list; anything malformed becomes ``()``."""
    if not isinstance(raw, str) or not raw:
        return ()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return ()
    if not isinstance(data, list):
        return ()
    return tuple(str(item) for item in data if isinstance(item, str))


def job_to_row(job: Job) -> dict[str, Any]:
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "description": job.description,
        "requirements": job.requirements,
        "benefits": job.benefits,
        "salary_min": job.salary_min,
        "salary_max": job.salary_max,
        "salary_currency": job.salary_currency,
        "employment_type": job.employment_type,
        "experience_level": job.experience_level,
        "application_type": job.application_type.value,
        "application_email": job.application_email,
        "application_link": job.application_link,
        "tags": tags_to_text(job.tags),
        "user_id": job.user_id,
        "created_at": dt_to_iso(job.created_at),
        "updated_at": dt_to_iso(job.updated_at),
    }


def row_to_job(row: Mapping[str, Any]) -> Job:
    created_at = iso_to_dt(row.get("created_at")) or EPOCH
    updated_at = iso_to_dt(row.get("updated_at")) or created_at
    return Job(
        id=str(row["id"]),
        title=row.get("title") or "",
        company=row.get("company") or "",
        location=row.get("location") or "",
        description=row.get("description") or "",
        employment_type=row.get("employment_type") or "",
        experience_level=row.get("experience_level") or "",
        user_id=row.get("user_id") or "",
        created_at=created_at,
        updated_at=updated_at,
        salary_min=_optional_int(row.get("salary_min")),
        salary_max=_optional_int(row.get("salary_max")),
        salary_currency=row.get("salary_currency") or "USD",
        tags=text_to_tags(row.get("tags")),
        requirements=row.get("requirements") or None,
        benefits=row.get("benefits") or None,
        application_type=_application_type(row.get("application_type")),
        application_email=row.get("application_email") or None,
        application_link=row.get("application_link") or None,
    )


def saved_to_row(mark: SavedJob) -> dict[str, Any]:
    return {
        "id": mark.id,
        "user_id": mark.user_id,
        "job_id": mark.job_id,
        "created_at": dt_to_iso(mark.created_at),
    }


def row_to_saved(row: Mapping[str, Any]) -> SavedJob:
    return SavedJob(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        job_id=str(row["job_id"]),
        created_at=iso_to_dt(row.get("created_at")) or EPOCH,
    )


def _optional_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


def _application_type(value: object) -> ApplicationType:
    try:
        return ApplicationType(value)
    except ValueError:
        return ApplicationType.EMAIL
