# src/kanban_board/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import show_board
from ..core.state import AppState

logger = logging.getLogger(__name__)

SAVE_WARNING = "Warning: changes may not be saved"


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    prompt: str = "> ",
) -> None:
    """
    Interactive board.

    The board is redrawn from the store's change notification, so every
    command that mutates a card shows the new board exactly once.
    """
    store = state.store
    app_name = state.settings.app_name
    warned: OSError | None = None

    def draw() -> None:
        nonlocal warned
        print(show_board(state), flush=True)
        err = store.persist_error
        if err is not None and err is not warned:
            _print_ts(f"{SAVE_WARNING} ({err}).")
        warned = err

    unsubscribe = store.subscribe(draw)
    logger.info("Console connector started (%s, %d tasks).", app_name, len(store))

    try:
        _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands, /exit to quit.\n")
        draw()

        while True:
            try:
                line = (await asyncio.to_thread(read_line, prompt)).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not line:
                continue

            if line.lower() in ("/exit", "/quit", "/q"):
                logger.info("Console exit command received.")
                break

            if not line.startswith("/"):
                line = f"/add {line}"

            try:
                reply = await command_registry.handle(state, line)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply:
                _print_ts(reply)
    finally:
        unsubscribe()
        logger.info("Console connector stopped.")
