from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

_LEVELS = {"info": 20, "warning": 30, "error": 40}


class StructuredLogger:
    """Writes one JSON object per log event to a text stream (stdout by default)."""

    def __init__(
        self,
        name: str = "nichejobs",
        *,
        min_level: str = "info",
        stream: TextIO | None = None,
    ) -> None:
        if min_level not in _LEVELS:
            raise ValueError(f"unknown log level: {min_level}")
        self._name = name
        self._threshold = _LEVELS[min_level]
        self._stream = stream

    def info(self, message: str, **fields: Any) -> None:
        self._emit("info", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._emit("warning", message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._emit("error", message, fields)

    def _emit(self, level: str, message: str, fields: dict[str, Any]) -> None:
        if _LEVELS[level] < self._threshold:
            return
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "logger": self._name,
            "message": message,
            "fields": fields,
        }
        stream = self._stream or sys.stdout
        stream.write(json.dumps(payload, sort_keys=True, default=str) + "\n")
