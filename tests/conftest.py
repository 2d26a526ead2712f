# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from kanban_board.board.blob_store import MemoryBlobStore
from kanban_board.board.task_store import TaskStore
from kanban_board.config import Settings
from kanban_board.core.state import AppState

from .fakes import NOW, FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture()
def store(blobs: MemoryBlobStore, clock: FakeClock) -> TaskStore:
    return TaskStore(blobs, clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test directory.

    Built directly rather than through from_env() so the developer's
    environment and .env never leak into tests.
    """
    return Settings(
        app_name="kanban-test",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        board_path=tmp_path / "data" / "board.json",
        storage_key="tasks_v1",
    )


@pytest.fixture()
def state(settings: Settings, store: TaskStore) -> AppState:
    """AppState wired with the in-memory store and a fake clock."""
    return AppState(settings=settings, store=store)
