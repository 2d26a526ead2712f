# src/kanban_board/board/blob_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileBlobStore:
    """
    Key-value blob store backed by a single JSON object file.

    - every key maps to a string value
    - writes go to a temp file and are moved into place with os.replace
    - a missing file reads as an empty store

    Methods are blocking; the task store calls them through asyncio.to_thread.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text("utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Blob store file {self._path} does not hold a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    def get_string(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_string(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            # An unreadable file is replaced rather than blocking every save.
            logger.warning("Blob store %s is unreadable; rewriting it.", self._path)
            data = {}
        data[key] = value
        self._write_all(data)
        logger.debug("Blob store wrote key=%s bytes=%d path=%s", key, len(value), self._path)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


class MemoryBlobStore:
    """In-process blob store (tests, throwaway boards)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get_string(self, key: str) -> str | None:
        return self.data.get(key)

    def set_string(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
