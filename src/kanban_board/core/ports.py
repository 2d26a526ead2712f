# src/kanban_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the board core.

The store depends on Protocols instead of concrete implementations, so the
on-disk blob store can be swapped for an in-memory one in tests.
"""

from collections.abc import Callable
from typing import Protocol

ChangeListener = Callable[[], None]
# Zero-argument callback fired after every store change.


class BlobStore(Protocol):
    """String-keyed store of string values (one serialised blob per key)."""

    def get_string(self, key: str) -> str | None: ...
    def set_string(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
