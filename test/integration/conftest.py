from __future__ import annotations

import os
from typing import Generator

import pytest

from infra.persistence import SQLiteJobRepository, SQLiteSavedJobRepository


@pytest.fixture()
def db_path(tmp_path: str) -> str:
    return os.path.join(tmp_path, "board.db")


@pytest.fixture()
def job_repo(db_path: str) -> Generator[SQLiteJobRepository, None, None]:
    repo = SQLiteJobRepository(db_path=db_path)
    yield repo
    repo.close()


@pytest.fixture()
def saved_repo(db_path: str) -> Generator[SQLiteSavedJobRepository, None, None]:
    repo = SQLiteSavedJobRepository(db_path=db_path)
    yield repo
    repo.close()
