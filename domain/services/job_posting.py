from __future__ import annotations

from domain.models import ApplicationType, AuthUser, Job, JobDraft
from domain.ports import ClockPort, IdGeneratorPort, JobRepositoryPort, LoggerPort
from domain.utils import unique_tags


class JobPostingValidationError(ValueError):
    """Raised when a job draft is incomplete or inconsistent."""


class NotAuthenticatedError(PermissionError):
    """Raised when a signed-out user tries to post a job."""


_REQUIRED_FIELDS = (
    "title",
    "company",
    "location",
    "description",
    "employment_type",
    "experience_level",
)


class JobPostingService:
    """Validates job drafts and creates them in the job store."""

    def __init__(
        self,
        *,
        job_repo: JobRepositoryPort,
        id_generator: IdGeneratorPort,
        clock: ClockPort,
        logger: LoggerPort,
    ) -> None:
        self._job_repo = job_repo
        self._id_generator = id_generator
        self._clock = clock
        self._logger = logger

    async def post_job(self, user: AuthUser | None, draft: JobDraft) -> Job:
        """
        Create a job owned by ``user``.

        Store failures propagate to the caller unchanged; nothing is
        cached locally, so callers reload the job list after success.
        """
        if user is None:
            raise NotAuthenticatedError("sign in to post a job")
        self.validate(draft)

        now = self._clock.now()
        is_email = draft.application_type is ApplicationType.EMAIL
        job = Job(
            id=self._id_generator.new_job_id(),
            title=draft.title.strip(),
            company=draft.company.strip(),
            location=draft.location.strip(),
            description=draft.description.strip(),
            employment_type=draft.employment_type,
            experience_level=draft.experience_level,
            user_id=user.id,
            created_at=now,
            updated_at=now,
            salary_min=draft.salary_min,
            salary_max=draft.salary_max,
            salary_currency=draft.salary_currency or "USD",
            tags=unique_tags(draft.tags),
            requirements=(draft.requirements or "").strip() or None,
            benefits=(draft.benefits or "").strip() or None,
            application_type=draft.application_type,
            application_email=draft.application_email if is_email else None,
            application_link=None if is_email else draft.application_link,
        )
        created = await self._job_repo.create_job(job)
        self._logger.info("job_posted", job_id=created.id, user_id=user.id)
        return created

    def validate(self, draft: JobDraft) -> None:
        missing = [name for name in _REQUIRED_FIELDS if not getattr(draft, name).strip()]
        if missing:
            raise JobPostingValidationError(
                f"Please fill in all required fields: {', '.join(missing)}",
            )
        if draft.application_type is ApplicationType.EMAIL and not draft.application_email:
            raise JobPostingValidationError("Please provide an application email")
        if draft.application_type is ApplicationType.LINK and not draft.application_link:
            raise JobPostingValidationError("Please provide an application link")
        for name in ("salary_min", "salary_max"):
            value = getattr(draft, name)
            if value is not None and value < 0:
                raise JobPostingValidationError(f"{name} cannot be negative")
        if (
            draft.salary_min is not None
            and draft.salary_max is not None
            and draft.salary_min > draft.salary_max
        ):
            raise JobPostingValidationError("salary_min cannot exceed salary_max")
