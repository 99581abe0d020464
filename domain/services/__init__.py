"""
Domain services.

The filter engine, the saved-job reconciler and the posting workflow.
They depend only on domain models and ports so that infrastructure and
UI layers can remain thin.
"""

from .filtering import (  # noqa: F401
    SALARY_THRESHOLDS,
    compute_visible,
    filter_options,
    matches,
)
from .job_board import JobBoard
from .job_posting import (
    JobPostingService,
    JobPostingValidationError,
    NotAuthenticatedError,
)
from .saved_jobs import SavedJobsReconciler

__all__ = [
    "SALARY_THRESHOLDS",
    "compute_visible",
    "filter_options",
    "matches",
    "JobBoard",
    "JobPostingService",
    "JobPostingValidationError",
    "NotAuthenticatedError",
    "SavedJobsReconciler",
]
