# src/kanban_board/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..board.task_store import TaskStore
from ..config import Settings


@dataclass
class AppState:
    settings: Settings
    store: TaskStore

    # Card numbers as last shown on the board (1-based position -> task id).
    shown_ids: list[str] = field(default_factory=list)
