# tests/test_console.py

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from kanban_board.board.task_models import TaskStatus
from kanban_board.board.task_store import TaskStore
from kanban_board.connectors.console_connector import SAVE_WARNING, run_console_loop
from kanban_board.core.state import AppState

from .fakes import FailingBlobStore, FakeClock, UnreadableBlobStore


def scripted(lines: Iterable[str]) -> Callable[[str], str]:
    """input() replacement: returns the given lines, then signals EOF."""
    it = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


@pytest.mark.asyncio
async def test_console_adds_moves_and_redraws(state: AppState, capsys: pytest.CaptureFixture[str]) -> None:
    await run_console_loop(state, read_line=scripted(["Buy milk", "", "/move 1 done", "/stats", "/exit", "never read"]))

    out = capsys.readouterr().out
    (task,) = state.store.tasks
    assert task.title == "Buy milk"
    assert task.status is TaskStatus.DONE
    assert 'Added "Buy milk".' in out
    assert 'Moved "Buy milk" to Done.' in out
    assert "Completion this week: 100%" in out
    # Initial board plus one redraw per change.
    assert out.count("To Do (") == 3


@pytest.mark.asyncio
async def test_console_unsubscribes_on_exit(state: AppState, capsys: pytest.CaptureFixture[str]) -> None:
    await run_console_loop(state, read_line=scripted([]))
    capsys.readouterr()

    await state.store.add("after console")

    assert "To Do (" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_console_warns_when_changes_are_not_saved(
    state: AppState, clock: FakeClock, capsys: pytest.CaptureFixture[str]
) -> None:
    state.store = TaskStore(FailingBlobStore(), clock=clock)

    await run_console_loop(state, read_line=scripted(["one", "two"]))

    out = capsys.readouterr().out
    assert len(state.store) == 2
    assert SAVE_WARNING in out


@pytest.mark.asyncio
async def test_console_warns_on_first_draw_when_board_could_not_be_read(
    state: AppState, clock: FakeClock, capsys: pytest.CaptureFixture[str]
) -> None:
    blobs = UnreadableBlobStore({"tasks_v1": "[]"})
    state.store = TaskStore(blobs, clock=clock)
    await state.store.load()

    await run_console_loop(state, read_line=scripted(["new task"]))

    out = capsys.readouterr().out
    first_board = out.index("To Do (")
    assert out.index(SAVE_WARNING) < out.index("To Do (", first_board + 1)
    assert blobs.data["tasks_v1"] == "[]"
