from __future__ import annotations

from datetime import datetime, timezone, tzinfo


class SystemClock:
    """Wall-clock time; always timezone-aware so stored timestamps compare cleanly."""

    def __init__(self, tz: tzinfo = timezone.utc) -> None:
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)
