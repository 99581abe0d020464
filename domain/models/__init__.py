from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Sequence


class ApplicationType(str, Enum):
    """How candidates apply to a posted job."""

    EMAIL = "email"
    LINK = "link"


@dataclass(frozen=True)
class Job:
    """
    A single job posting as loaded from the job store.

    The store is responsible for assigning ``id`` and the timestamps;
    ``created_at`` never changes after creation.
    """

    id: str
    title: str
    company: str
    location: str
    description: str
    employment_type: str
    experience_level: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str = "USD"
    tags: Sequence[str] = field(default_factory=tuple)
    requirements: str | None = None
    benefits: str | None = None
    application_type: ApplicationType = ApplicationType.EMAIL
    application_email: str | None = None
    application_link: str | None = None


@dataclass(frozen=True)
class JobDraft:
    """Job fields collected from the poster before identity is assigned."""

    title: str
    company: str
    location: str
    description: str
    employment_type: str
    experience_level: str
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str = "USD"
    tags: Sequence[str] = field(default_factory=tuple)
    requirements: str | None = None
    benefits: str | None = None
    application_type: ApplicationType = ApplicationType.EMAIL
    application_email: str | None = None
    application_link: str | None = None


@dataclass(frozen=True)
class SavedJob:
    """A user's bookmark on a job."""

    id: str
    user_id: str
    job_id: str
    created_at: datetime


@dataclass(frozen=True)
class JobFilters:
    """
    Active search and filter predicates.

    Every field is a raw string as entered by the user; an empty string
    means the predicate matches everything.
    """

    query: str = ""
    location: str = ""
    employment_type: str = ""
    experience_level: str = ""
    salary_min: str = ""

    @property
    def is_empty(self) -> bool:
        return not (
            self.query
            or self.location
            or self.employment_type
            or self.experience_level
            or self.salary_min
        )


@dataclass(frozen=True)
class FilterOptions:
    """Choices offered by the filter dropdowns for the loaded jobs."""

    locations: Sequence[str] = field(default_factory=tuple)
    employment_types: Sequence[str] = field(default_factory=tuple)
    experience_levels: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str


@dataclass(frozen=True)
class AuthState:
    """One emission of the auth provider; ``user is None`` means signed out."""

    user: AuthUser | None = None
    is_loading: bool = False


class BoardError(str, Enum):
    """Recoverable failures surfaced to the user as notifications."""

    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"
    UNSAVE_FAILED = "unsave_failed"
    NOT_AUTHENTICATED = "not_authenticated"


class SaveAction(str, Enum):
    SAVED = "saved"
    UNSAVED = "unsaved"


@dataclass(frozen=True)
class SaveEvent:
    """Confirmed outcome of a save toggle."""

    job_id: str
    action: SaveAction
    mark: SavedJob


@dataclass(frozen=True)
class SaveResult:
    event: SaveEvent | None = None
    error: BoardError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class LoadResult:
    count: int = 0
    error: BoardError | None = None
    applied: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SavedJobView:
    """A saved mark joined with the job it points to."""

    mark: SavedJob
    job: Job


@dataclass(frozen=True)
class AppConfig:
    """Application-level configuration loaded from config.json."""

    db_path: str = "nichejobs.db"
    list_limit: int = 100
    default_currency: str = "USD"
    log_level: str = "info"
    discard_stale_loads: bool = False


__all__ = [
    "AppConfig",
    "ApplicationType",
    "Job",
    "JobDraft",
    "SavedJob",
    "JobFilters",
    "FilterOptions",
    "AuthUser",
    "AuthState",
    "BoardError",
    "SaveAction",
    "SaveEvent",
    "SaveResult",
    "LoadResult",
    "SavedJobView",
]
