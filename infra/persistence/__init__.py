"""SQLite-backed persistence adapters for the job and saved-job store ports."""

from ._codec import text_to_tags, tags_to_text
from .sqlite_job_repository import SQLiteJobRepository
from .sqlite_saved_job_repository import SQLiteSavedJobRepository

__all__ = [
    "SQLiteJobRepository",
    "SQLiteSavedJobRepository",
    "tags_to_text",
    "text_to_tags",
]
