from __future__ import annotations

import sys
from typing import TextIO


class ConsoleNotifier:
    """Prints notifications; destructive ones go to stderr."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err

    async def notify(
        self,
        title: str,
        description: str,
        *,
        destructive: bool = False,
    ) -> None:
        stream = (self._err or sys.stderr) if destructive else (self._out or sys.stdout)
        stream.write(f"[{title}] {description}\n")
