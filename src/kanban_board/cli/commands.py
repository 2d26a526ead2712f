# src/kanban_board/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shutil
from collections.abc import Awaitable, Callable

from ..board.task_models import EmptyTitleError, Task, TaskStatus
from ..core.state import AppState
from ..render import render_board, render_summary

CommandHandler = Callable[[AppState, list[str], str], str | Awaitable[str]]

logger = logging.getLogger(__name__)

MIN_ID_PREFIX = 4


class CommandRegistry:
    """Slash-command registry used by the console (/help, /add, /move, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Handlers get the split args plus the raw text after the command name;
        coroutine handlers are awaited.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        name = name.lower()
        rest = rest.strip()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%r", name, rest)
        reply = handler(state, rest.split(), rest)
        if inspect.isawaitable(reply):
            reply = await reply
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Plain text (no leading /) adds a task. <card> is a board number or task id.")
        return "\n".join(lines)


registry = CommandRegistry()


def show_board(state: AppState) -> str:
    """Render the board and remember which card number points at which task."""
    width = shutil.get_terminal_size((80, 24)).columns
    text, ids = render_board(state.store.tasks, width=width)
    state.shown_ids = ids
    return text


def resolve_card(state: AppState, ref: str) -> Task | None:
    store = state.store
    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(state.shown_ids):
            return store.get(state.shown_ids[n - 1])

    # Ids can be all digits too (timestamp ids from older boards).
    task = store.get(ref)
    if task is not None:
        return task

    # Unique id prefix, so long ids do not have to be typed in full.
    if len(ref) < MIN_ID_PREFIX:
        return None
    matches = [t for t in store.tasks if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def _card_or_error(state: AppState, args: list[str], usage: str) -> Task | str:
    if not args:
        return usage
    task = resolve_card(state, args[0])
    if task is None:
        return f"No card {args[0]}. Use /board to see card numbers."
    return task


def cmd_help(state: AppState, args: list[str], rest: str) -> str:
    return registry.build_help()


def cmd_board(state: AppState, args: list[str], rest: str) -> str:
    return show_board(state)


async def cmd_add(state: AppState, args: list[str], rest: str) -> str:
    try:
        task = await state.store.add(rest)
    except EmptyTitleError:
        return "Usage: /add <title>"
    return f'Added "{task.title}".'


async def _set_status(state: AppState, args: list[str], status: TaskStatus, usage: str) -> str:
    found = _card_or_error(state, args, usage)
    if isinstance(found, str):
        return found
    if found.status is status:
        return f'"{found.title}" is already in {status.label}.'
    await state.store.update_status(found.id, status)
    return f'Moved "{found.title}" to {status.label}.'


async def cmd_done(state: AppState, args: list[str], rest: str) -> str:
    return await _set_status(state, args, TaskStatus.DONE, "Usage: /done <card>")


async def cmd_todo(state: AppState, args: list[str], rest: str) -> str:
    return await _set_status(state, args, TaskStatus.TODO, "Usage: /todo <card>")


async def cmd_toggle(state: AppState, args: list[str], rest: str) -> str:
    found = _card_or_error(state, args, "Usage: /toggle <card>")
    if isinstance(found, str):
        return found
    target = TaskStatus.TODO if found.is_done else TaskStatus.DONE
    await state.store.update_status(found.id, target)
    return f'Moved "{found.title}" to {target.label}.'


async def cmd_move(state: AppState, args: list[str], rest: str) -> str:
    """
    /move <card> todo|done

    Console stand-in for dragging a card onto a column: one status update.
    """
    usage = "Usage: /move <card> todo|done"
    if len(args) < 2:
        return usage
    try:
        target = TaskStatus(args[1].lower())
    except ValueError:
        return usage
    return await _set_status(state, args[:1], target, usage)


async def cmd_rename(state: AppState, args: list[str], rest: str) -> str:
    usage = "Usage: /rename <card> <new title>"
    found = _card_or_error(state, args, usage)
    if isinstance(found, str):
        return found
    new_title = rest[len(args[0]) :].strip()
    if not new_title:
        return usage
    old_title = found.title
    renamed = await state.store.rename(found.id, new_title)
    if renamed is None:
        return f"No card {args[0]}."
    return f'Renamed "{old_title}" to "{renamed.title}".'


async def cmd_delete(state: AppState, args: list[str], rest: str) -> str:
    found = _card_or_error(state, args, "Usage: /delete <card>")
    if isinstance(found, str):
        return found
    await state.store.delete(found.id)
    return f'Deleted "{found.title}".'


def cmd_stats(state: AppState, args: list[str], rest: str) -> str:
    return render_summary(state.store.weekly_summary())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("board", cmd_board, help_text="Show the board.", aliases=["b", "ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.", aliases=["a"])
registry.register("done", cmd_done, help_text="Mark a card as done: /done <card>.", aliases=["d"])
registry.register("todo", cmd_todo, help_text="Move a card back to To Do: /todo <card>.")
registry.register("toggle", cmd_toggle, help_text="Flip a card between To Do and Done.", aliases=["t"])
registry.register("move", cmd_move, help_text="Move a card to a column: /move <card> todo|done.", aliases=["mv"])
registry.register("rename", cmd_rename, help_text="Rename a card: /rename <card> <title>.")
registry.register("delete", cmd_delete, help_text="Delete a card: /delete <card>.", aliases=["rm"])
registry.register("stats", cmd_stats, help_text="Weekly summary and per-day chart.", aliases=["s"])
