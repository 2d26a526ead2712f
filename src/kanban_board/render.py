# src/kanban_board/render.py

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from itertools import zip_longest

from .board.stats import WeeklySummary
from .board.task_models import Task, TaskStatus

COLUMNS: tuple[TaskStatus, ...] = (TaskStatus.TODO, TaskStatus.DONE)
EMPTY_HINTS = {
    TaskStatus.TODO: "No tasks. Add one above.",
    TaskStatus.DONE: "Nothing done yet.",
}
SEP = " | "
MIN_COL_WIDTH = 24
BAR_CHAR = "#"
MAX_BAR = 30


def format_stamp(ts: datetime) -> str:
    """'Mon, 5 Oct, 3:04PM'"""
    hour = ts.hour % 12 or 12
    return f"{ts:%a}, {ts.day} {ts:%b}, {hour}:{ts:%M}{ts:%p}"


def card_subtitle(task: Task) -> str:
    if task.is_done:
        return f"Done • {format_stamp(task.done_at or task.created_at)}"
    return f"Created • {format_stamp(task.created_at)}"


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(0, width - 1)] + "…"


def board_order(tasks: Sequence[Task]) -> list[Task]:
    """Cards in the order they are numbered on screen: To Do column, then Done."""
    return [t for status in COLUMNS for t in tasks if t.status is status]


def render_board(tasks: Sequence[Task], *, width: int = 80) -> tuple[str, list[str]]:
    """
    Draw both columns side by side.

    Returns the text and the task ids in card-number order, so "3" typed by
    the user maps back to ids[2].
    """
    col_width = max(MIN_COL_WIDTH, (width - len(SEP)) // len(COLUMNS))
    ordered = board_order(tasks)
    numbers = {t.id: n for n, t in enumerate(ordered, start=1)}

    columns: list[list[str]] = []
    for status in COLUMNS:
        items = [t for t in ordered if t.status is status]
        lines = [f"{status.label} ({len(items)})", "-" * col_width]
        if not items:
            lines.append(EMPTY_HINTS[status])
        for t in items:
            lines.append(_clip(f"{numbers[t.id]}. {t.title}", col_width))
            lines.append(_clip(f"   {card_subtitle(t)}", col_width))
        columns.append(lines)

    rows = [
        SEP.join(cell.ljust(col_width) for cell in row).rstrip()
        for row in zip_longest(*columns, fillvalue="")
    ]
    return "\n".join(rows), [t.id for t in ordered]


def render_summary(summary: WeeklySummary) -> str:
    lines = [
        "Weekly Summary",
        f"Completion this week: {summary.percent}%",
        f"  {summary.done} of {summary.created} tasks done",
        "",
        "Tasks completed per day (last 7 days)",
    ]

    peak = max(summary.per_day.values(), default=0)
    for day, count in summary.per_day.items():
        bar_len = 0 if peak == 0 else max(1 if count else 0, round(count * MAX_BAR / peak))
        lines.append(f"  {day:%a} | {BAR_CHAR * bar_len}{' ' if bar_len else ''}{count}")

    lines += [
        "",
        f"Week of {summary.range_label}",
        f"  Created: {summary.created}   Done: {summary.done}   Complete: {summary.percent}%",
    ]
    return "\n".join(lines)
