from __future__ import annotations

from datetime import datetime
from typing import Any, Awaitable, Callable, Protocol, Sequence, runtime_checkable

from domain.models import AuthState, Job, SavedJob

AuthListener = Callable[[AuthState], Awaitable[None]]
Unsubscribe = Callable[[], None]


@runtime_checkable
class JobRepositoryPort(Protocol):
    """
    Remote store of job postings.

    Implementations return jobs ordered by ``created_at`` descending and
    assign identity and timestamps on create.
    """

    async def list_jobs(self, *, limit: int = 100) -> Sequence[Job]:
        ...

    async def create_job(self, job: Job) -> Job:
        ...

    async def delete_job(self, job_id: str) -> None:
        ...


@runtime_checkable
class SavedJobRepositoryPort(Protocol):
    """
    Remote store of saved-job marks.

    No uniqueness is enforced on ``(user_id, job_id)``; callers must
    deduplicate.
    """

    async def list_saved(self, user_id: str) -> Sequence[SavedJob]:
        ...

    async def create_saved(self, mark: SavedJob) -> SavedJob:
        ...

    async def delete_saved(self, mark_id: str) -> None:
        ...


@runtime_checkable
class AuthProviderPort(Protocol):
    """Source of the signed-in user and sign-in/out events."""

    def current_state(self) -> AuthState:
        ...

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        ...

    async def sign_out(self) -> None:
        ...


@runtime_checkable
class NotifierPort(Protocol):
    """Non-blocking user notifications (toasts in a UI, lines in a CLI)."""

    async def notify(
        self,
        title: str,
        description: str,
        *,
        destructive: bool = False,
    ) -> None:
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Time source for deterministic and easily testable code."""

    def now(self) -> datetime:
        ...


@runtime_checkable
class IdGeneratorPort(Protocol):
    """Generation of client-side identifiers for new jobs and saved marks."""

    def new_job_id(self) -> str:
        ...

    def new_saved_job_id(self) -> str:
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Structured, testable logging abstraction."""

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, **fields: Any) -> None:
        ...


__all__ = [
    "AuthListener",
    "Unsubscribe",
    "JobRepositoryPort",
    "SavedJobRepositoryPort",
    "AuthProviderPort",
    "NotifierPort",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
