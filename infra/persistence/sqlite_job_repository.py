from __future__ import annotations

import asyncio
import sqlite3
import threading
from typing import Sequence

from domain.models import Job

from ._codec import job_to_row, row_to_job


class SQLiteJobRepository:
    """
    SQLite-backed implementation of ``JobRepositoryPort``.

    Blocking calls run in a worker thread so the event loop stays free.
    """

    _SCHEMA_SQL = """\
    CREATE TABLE IF NOT EXISTS jobs (
        id                TEXT PRIMARY KEY,
        title             TEXT NOT NULL,
        company           TEXT NOT NULL,
        location          TEXT NOT NULL,
        description       TEXT NOT NULL,
        requirements      TEXT,
        benefits          TEXT,
        salary_min        INTEGER,
        salary_max        INTEGER,
        salary_currency   TEXT NOT NULL DEFAULT 'USD',
        employment_type   TEXT NOT NULL,
        experience_level  TEXT NOT NULL,
        application_type  TEXT NOT NULL,
        application_email TEXT,
        application_link  TEXT,
        tags              TEXT,
        user_id           TEXT NOT NULL,
        created_at        TEXT NOT NULL,
        updated_at        TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_jobs_created_at ON jobs (created_at);
    """

    _COLUMNS = (
        "id", "title", "company", "location", "description", "requirements",
        "benefits", "salary_min", "salary_max", "salary_currency",
        "employment_type", "experience_level", "application_type",
        "application_email", "application_link", "tags", "user_id",
        "created_at", "updated_at",
    )

    def __init__(self, db_path: str = ":memory:") -> None:
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(self._SCHEMA_SQL)
        self._lock = threading.Lock()

    def __enter__(self) -> "SQLiteJobRepository":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    async def list_jobs(self, *, limit: int = 100) -> Sequence[Job]:
        return await asyncio.to_thread(self._list_jobs, limit)

    async def create_job(self, job: Job) -> Job:
        return await asyncio.to_thread(self._create_job, job)

    async def delete_job(self, job_id: str) -> None:
        await asyncio.to_thread(self._delete_job, job_id)

    def close(self) -> None:
        self._conn.close()

    # -- blocking helpers ---------------------------------------------------

    def _list_jobs(self, limit: int) -> list[Job]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {', '.join(self._COLUMNS)} FROM jobs "
                "ORDER BY created_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [row_to_job(dict(r)) for r in rows]

    def _create_job(self, job: Job) -> Job:
        row = job_to_row(job)
        placeholders = ", ".join("?" for _ in self._COLUMNS)
        with self._lock:
            self._conn.execute(
                f"INSERT INTO jobs ({', '.join(self._COLUMNS)}) VALUES ({placeholders})",
                tuple(row[c] for c in self._COLUMNS),
            )
            self._conn.commit()
            stored = self._conn.execute(
                f"SELECT {', '.join(self._COLUMNS)} FROM jobs WHERE id = ?",
                (job.id,),
            ).fetchone()
        return row_to_job(dict(stored))

    def _delete_job(self, job_id: str) -> None:
        with self._lock:
            self._conn.execute("DELETE FROM jobs WHERE id = ?", (job_id,))
            self._conn.commit()
