"""
Domain layer package.

This package contains the job board's models, ports and the pure
filtering and save-state logic. Nothing here touches storage, auth
or presentation directly.
"""

from .models import (  # noqa: F401
    AppConfig,
    ApplicationType,
    AuthState,
    AuthUser,
    BoardError,
    FilterOptions,
    Job,
    JobDraft,
    JobFilters,
    LoadResult,
    SaveAction,
    SavedJob,
    SavedJobView,
    SaveEvent,
    SaveResult,
)
from .ports import (  # noqa: F401
    AuthProviderPort,
    ClockPort,
    IdGeneratorPort,
    JobRepositoryPort,
    LoggerPort,
    NotifierPort,
    SavedJobRepositoryPort,
)

__all__ = [
    # Models
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
    # Ports
    "JobRepositoryPort",
    "SavedJobRepositoryPort",
    "AuthProviderPort",
    "NotifierPort",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
