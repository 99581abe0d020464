from __future__ import annotations

import asyncio
import sqlite3
import threading
from typing import Sequence

from domain.models import SavedJob

from ._codec import row_to_saved, saved_to_row


class SQLiteSavedJobRepository:
    """
    SQLite-backed implementation of ``SavedJobRepositoryPort``.

    Like the hosted store it stands in for, it does not enforce one mark
    per (user, job); the reconciler deduplicates on load.
    """

    _SCHEMA_SQL = """\
    CREATE TABLE IF NOT EXISTS saved_jobs (
        id         TEXT PRIMARY KEY,
        user_id    TEXT NOT NULL,
        job_id     TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_saved_jobs_user ON saved_jobs (user_id);
    """

    def __init__(self, db_path: str = ":memory:") -> None:
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(self._SCHEMA_SQL)
        self._lock = threading.Lock()

    def __enter__(self) -> "SQLiteSavedJobRepository":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    async def list_saved(self, user_id: str) -> Sequence[SavedJob]:
        return await asyncio.to_thread(self._list_saved, user_id)

    async def create_saved(self, mark: SavedJob) -> SavedJob:
        return await asyncio.to_thread(self._create_saved, mark)

    async def delete_saved(self, mark_id: str) -> None:
        await asyncio.to_thread(self._delete_saved, mark_id)

    def close(self) -> None:
        self._conn.close()

    # -- blocking helpers ---------------------------------------------------

    def _list_saved(self, user_id: str) -> list[SavedJob]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, user_id, job_id, created_at FROM saved_jobs "
                "WHERE user_id = ? ORDER BY created_at DESC",
                (user_id,),
            ).fetchall()
        return [row_to_saved(dict(r)) for r in rows]

    def _create_saved(self, mark: SavedJob) -> SavedJob:
        row = saved_to_row(mark)
        with self._lock:
            self._conn.execute(
                "INSERT INTO saved_jobs (id, user_id, job_id, created_at) "
                "VALUES (:id, :user_id, :job_id, :created_at)",
                row,
            )
            self._conn.commit()
        return row_to_saved(row)

    def _delete_saved(self, mark_id: str) -> None:
        # Deleting an unknown id is a no-op so create-then-delete races stay safe.
        with self._lock:
            self._conn.execute("DELETE FROM saved_jobs WHERE id = ?", (mark_id,))
            self._conn.commit()
