from __future__ import annotations

import time
import uuid


class UuidIdGenerator:
    """Client-side ids in the ``<prefix>_<epoch ms>_<random>`` shape the store expects."""

    def new_job_id(self) -> str:
        return self._make("job")

    def new_saved_job_id(self) -> str:
        return self._make("save")

    @staticmethod
    def _make(prefix: str) -> str:
        millis = int(time.time() * 1000)
        return f"{prefix}_{millis}_{uuid.uuid4().hex[:9]}"
