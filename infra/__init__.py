"""Infrastructure adapters – concrete implementations of domain ports."""

from .auth import LocalAuthProvider
from .config import FileSystemConfigProvider
from .interaction import ConsoleNotifier
from .persistence import SQLiteJobRepository, SQLiteSavedJobRepository
from .runtime import StructuredLogger, SystemClock, UuidIdGenerator

__all__ = [
    "LocalAuthProvider",
    "FileSystemConfigProvider",
    "ConsoleNotifier",
    "SQLiteJobRepository",
    "SQLiteSavedJobRepository",
    "SystemClock",
    "UuidIdGenerator",
    "StructuredLogger",
]
