"""
Reusable fakes and in-memory implementations for tests.
"""

from .fake_auth_provider import FakeAuthProvider
from .fake_job_repository import InMemoryJobRepository, StoreUnavailable
from .fake_notifier import RecordingNotifier
from .fake_runtime import FixedClock, InMemoryLogger, SequentialIdGenerator
from .fake_saved_job_repository import InMemorySavedJobRepository

__all__ = [
    "FakeAuthProvider",
    "InMemoryJobRepository",
    "InMemorySavedJobRepository",
    "StoreUnavailable",
    "RecordingNotifier",
    "FixedClock",
    "SequentialIdGenerator",
    "InMemoryLogger",
]
