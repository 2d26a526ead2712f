# tests/test_bootstrap.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from kanban_board.board.task_models import TaskStatus
from kanban_board.cli.bootstrap import create_initial_state
from kanban_board.config import Settings
from kanban_board.logging_setup import setup_logging


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("KANBAN_DATA_DIR", str(tmp_path / "d"))
    monkeypatch.setenv("KANBAN_LOG_TO_FILE", "no")
    monkeypatch.setenv("KANBAN_APP_NAME", "  ")
    monkeypatch.delenv("KANBAN_BOARD_PATH", raising=False)
    monkeypatch.delenv("KANBAN_STORAGE_KEY", raising=False)
    monkeypatch.delenv("KANBAN_LOG_LEVEL", raising=False)

    s = Settings.from_env()

    assert s.app_name == "kanban"
    assert s.log_to_file is False
    assert s.data_dir == tmp_path / "d"
    assert s.board_path == tmp_path / "d" / "board.json"
    assert s.storage_key == "tasks_v1"
    assert s.log_level == "WARNING"


def test_explicit_board_path_wins(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("KANBAN_BOARD_PATH", str(tmp_path / "elsewhere.json"))
    assert Settings.from_env().board_path == tmp_path / "elsewhere.json"


@pytest.mark.asyncio
async def test_state_shares_one_store_across_views(settings: Settings) -> None:
    state = create_initial_state(settings=settings)
    assert settings.data_dir.is_dir()

    task = await state.store.add("persisted")
    await state.store.update_status(task.id, TaskStatus.DONE)
    assert len(state.store.tasks_in_last_7_days_done()) == 1

    again = create_initial_state(settings=settings)
    await again.store.load()
    assert [t.title for t in again.store.tasks] == ["persisted"]
    assert settings.board_path.exists()


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        setup_logging(log_dir=tmp_path, console_level=logging.WARNING)
        logging.getLogger("kanban_board.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in (tmp_path / "kanban.log").read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        logging.captureWarnings(False)
