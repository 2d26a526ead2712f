# src/kanban_board/board/stats.py

"""
Weekly statistics over a task list.

The window is the 7 calendar days ending today: midnight six days ago up to
(but excluding) midnight tomorrow. All functions take `now` explicitly so
callers and tests control the clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .task_models import Task

WINDOW_DAYS = 7


def _midnight(d: date) -> datetime:
    return datetime.combine(d, time.min)


def week_start(now: datetime) -> datetime:
    return _midnight(now.date()) - timedelta(days=WINDOW_DAYS - 1)


def _window(now: datetime) -> tuple[datetime, datetime]:
    return week_start(now), _midnight(now.date()) + timedelta(days=1)


def created_in_window(tasks: Iterable[Task], now: datetime) -> list[Task]:
    start, end = _window(now)
    return [t for t in tasks if start <= t.created_at < end]


def done_in_window(tasks: Iterable[Task], now: datetime) -> list[Task]:
    start, end = _window(now)
    return [t for t in tasks if t.done_at is not None and start <= t.done_at < end]


def done_per_day(tasks: Iterable[Task], now: datetime) -> dict[datetime, int]:
    """Completed-task counts keyed by day (oldest first, zero days included)."""
    start = week_start(now)
    buckets = {start + timedelta(days=i): 0 for i in range(WINDOW_DAYS)}
    for t in done_in_window(tasks, now):
        if t.done_at is not None:
            buckets[_midnight(t.done_at.date())] += 1
    return buckets


def completion_percent(created: int, done: int) -> int:
    # Half-up rounding; can exceed 100 when older tasks were finished this week.
    if created <= 0:
        return 0
    return int(done * 100 / created + 0.5)


def week_range_label(now: datetime) -> str:
    start = week_start(now)
    return f"{start.day} {start:%b} - {now.day} {now:%b}"


@dataclass(slots=True, frozen=True)
class WeeklySummary:
    created: int
    done: int
    percent: int
    per_day: dict[datetime, int]
    range_label: str


def weekly_summary(tasks: Iterable[Task], now: datetime) -> WeeklySummary:
    items = list(tasks)
    created = len(created_in_window(items, now))
    done = len(done_in_window(items, now))
    return WeeklySummary(
        created=created,
        done=done,
        percent=completion_percent(created, done),
        per_day=done_per_day(items, now),
        range_label=week_range_label(now),
    )
