# src/kanban_board/board/task_store.py

from __future__ import annotations

import asyncio
import dataclasses
import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from ..core.ports import BlobStore, ChangeListener
from . import stats
from .task_models import (
    CorruptBoardData,
    EmptyTitleError,
    Task,
    TaskStatus,
    decode_tasks,
    encode_tasks,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "tasks_v1"


class TaskStore:
    """
    In-memory task board persisted as one JSON blob.

    - the in-memory list is the source of truth (newest task first)
    - every mutation rewrites the whole list under `storage_key`
    - writes are serialised with an asyncio.Lock and run in a worker thread
    - listeners are called once per mutation, after the write

    Storage failures never undo a mutation: the error is kept in
    `persist_error` so the UI can warn that changes may not be saved.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        *,
        storage_key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._blob = blob_store
        self._key = storage_key
        self._clock = clock
        self._tasks: list[Task] = []
        self._listeners: list[ChangeListener] = []
        self._write_lock = asyncio.Lock()
        self._persist_error: OSError | None = None
        # Set while the stored board could not be read; writes are held back
        # so the unread board is never overwritten.
        self._read_error: OSError | None = None

    # ---- read surface ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def persist_error(self) -> OSError | None:
        return self._persist_error

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._tasks if t.status is status]

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- change notification ----

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register `listener` (once); returns a callable that unregisters it."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("unsubscribe: listener %r was not registered", listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Board change listener failed: %r", listener)

    # ---- persistence ----

    async def load(self) -> None:
        """
        Replace the current list with the stored one.

        No stored blob leaves the store untouched. A blob that cannot be
        decoded is logged and replaced by an empty board.

        If storage cannot be read at all, the store keeps working in memory
        only: `persist_error` stays set and nothing is written until a later
        `load` succeeds.
        """
        try:
            raw = await asyncio.to_thread(self._blob.get_string, self._key)
        except OSError as e:
            logger.warning("Could not read board key=%s: %s; changes stay in memory.", self._key, e)
            self._read_error = e
            self._persist_error = e
            self._notify()
            return
        except ValueError:
            logger.exception("Board storage is unreadable; starting with an empty board.")
            raw = "[]"

        self._read_error = None
        self._persist_error = None

        if raw is None:
            logger.info("No saved board under key=%s", self._key)
            return

        try:
            tasks = decode_tasks(raw)
        except CorruptBoardData:
            logger.exception("Saved board key=%s is corrupt; starting with an empty board.", self._key)
            tasks = []

        self._tasks = tasks
        logger.info("Board loaded key=%s tasks=%d", self._key, len(tasks))
        self._notify()

    async def _persist(self) -> None:
        if self._read_error is not None:
            logger.warning("Board key=%s was never read; not saving over it.", self._key)
            self._persist_error = self._read_error
            return

        async with self._write_lock:
            # Encode under the lock so the last write always carries the latest list.
            payload = encode_tasks(self._tasks)
            try:
                await asyncio.to_thread(self._blob.set_string, self._key, payload)
            except OSError as e:
                logger.warning("Failed to save board key=%s: %s", self._key, e)
                self._persist_error = e
                return
            self._persist_error = None

    async def _commit(self) -> None:
        await self._persist()
        self._notify()

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    @staticmethod
    def _clean_title(title: str) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise EmptyTitleError("Task title must not be blank")
        return cleaned

    # ---- commands ----

    async def add(self, title: str) -> Task:
        task = Task(
            id=uuid.uuid4().hex,
            title=self._clean_title(title),
            status=TaskStatus.TODO,
            created_at=self._clock(),
        )
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s", task.id)
        await self._commit()
        return task

    async def update_status(self, task_id: str, status: TaskStatus) -> Task | None:
        i = self._index_of(task_id)
        if i == -1:
            return None

        status = TaskStatus(status)
        done_at = self._clock() if status is TaskStatus.DONE else None
        task = dataclasses.replace(self._tasks[i], status=status, done_at=done_at)
        self._tasks[i] = task
        logger.debug("Task %s -> %s", task_id, status.value)
        await self._commit()
        return task

    async def delete(self, task_id: str) -> bool:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = len(self._tasks) != before
        if removed:
            logger.debug("Task deleted id=%s", task_id)
        await self._commit()
        return removed

    async def rename(self, task_id: str, title: str) -> Task | None:
        cleaned = self._clean_title(title)
        i = self._index_of(task_id)
        if i == -1:
            return None

        task = dataclasses.replace(self._tasks[i], title=cleaned)
        self._tasks[i] = task
        await self._commit()
        return task

    # ---- weekly statistics ----

    def tasks_in_last_7_days_created(self) -> list[Task]:
        return stats.created_in_window(self._tasks, self._clock())

    def tasks_in_last_7_days_done(self) -> list[Task]:
        return stats.done_in_window(self._tasks, self._clock())

    def done_per_day_last_7(self) -> dict[datetime, int]:
        return stats.done_per_day(self._tasks, self._clock())

    def weekly_summary(self) -> stats.WeeklySummary:
        return stats.weekly_summary(self._tasks, self._clock())
