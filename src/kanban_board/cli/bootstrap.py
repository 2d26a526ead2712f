# src/kanban_board/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- builds the single TaskStore shared by the board and stats views.
"""

from __future__ import annotations

import logging

from ..board.blob_store import JsonFileBlobStore
from ..board.task_store import TaskStore
from ..config import Settings, get_settings
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.board_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). The store starts empty;
    call `await state.store.load()` before showing it.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(JsonFileBlobStore(settings.board_path), storage_key=settings.storage_key)
    logger.info("Board store ready path=%s key=%s", settings.board_path, settings.storage_key)
    return AppState(settings=settings, store=store)
