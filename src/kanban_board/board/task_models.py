# src/kanban_board/board/task_models.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    """Board column a task lives in."""

    TODO = "todo"
    DONE = "done"

    @property
    def label(self) -> str:
        return "To Do" if self is TaskStatus.TODO else "Done"


class BoardError(RuntimeError):
    pass


class EmptyTitleError(BoardError, ValueError):
    pass


class CorruptBoardData(BoardError):
    pass


@dataclass(slots=True, frozen=True)
class Task:
    """
    One board card.

    Instances are immutable; the store replaces a task with an updated copy on
    every mutation, so snapshots handed to the UI never change under it.
    """

    id: str
    title: str
    status: TaskStatus
    created_at: datetime
    done_at: datetime | None = None

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE


def _parse_ts(raw: Any, field_name: str) -> datetime:
    if not isinstance(raw, str):
        raise CorruptBoardData(f"{field_name} must be an ISO-8601 string, got {type(raw).__name__}")
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError as e:
        raise CorruptBoardData(f"Bad {field_name} timestamp: {raw!r}") from e
    if ts.tzinfo is not None:
        # Board timestamps are naive local time.
        ts = ts.astimezone().replace(tzinfo=None)
    return ts


def task_to_json(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "status": task.status.value,
        "createdAt": task.created_at.isoformat(),
        "doneAt": task.done_at.isoformat() if task.done_at is not None else None,
    }


def task_from_json(data: Any) -> Task:
    """
    Decode one stored row.

    Unknown status values fall back to todo. A done task stored without
    doneAt, or a todo task stored with one, is normalised so the
    done_at/status invariant holds after loading.
    """
    if not isinstance(data, dict):
        raise CorruptBoardData(f"Task row must be an object, got {type(data).__name__}")

    task_id = data.get("id")
    title = data.get("title")
    if not isinstance(task_id, str) or not task_id:
        raise CorruptBoardData(f"Task row has no valid id: {data!r}")
    if not isinstance(title, str):
        raise CorruptBoardData(f"Task {task_id} has no valid title")

    status = TaskStatus.DONE if data.get("status") == "done" else TaskStatus.TODO
    created_at = _parse_ts(data.get("createdAt"), "createdAt")

    raw_done = data.get("doneAt")
    done_at = _parse_ts(raw_done, "doneAt") if raw_done is not None else None
    if status is TaskStatus.DONE and done_at is None:
        done_at = created_at
    if status is TaskStatus.TODO:
        done_at = None

    return Task(id=task_id, title=title, status=status, created_at=created_at, done_at=done_at)


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_json(t) for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str) -> list[Task]:
    """Decode a stored blob into tasks, keeping stored order."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptBoardData(f"Board blob is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptBoardData(f"Board blob must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for row in data:
        task = task_from_json(row)
        if task.id in seen:
            logger.warning("Duplicate task id %s in stored board; keeping the first.", task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out
