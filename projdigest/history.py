"""Recently scanned project roots, most recent first."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional

from .logging import get_logger

logger = get_logger("history")

MAX_HISTORY = 20
_HISTORY_FILENAME = "history.txt"
_HOME_ENV = "PROJDIGEST_HOME"


def default_history_path() -> Path:
    base = os.environ.get(_HOME_ENV)
    directory = Path(base).expanduser() if base else Path.home() / ".projdigest"
    return directory / _HISTORY_FILENAME


def _normalise(paths: Iterable[str], limit: int) -> List[str]:
    result: List[str] = []
    seen = set()
    for raw in paths:
        path = raw.strip()
        if not path:
            continue
        key = path.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(path)
        if len(result) >= limit:
            break
    return result


class PathHistory:
    """Plain-text store of prior scan roots; I/O failures never propagate."""

    def __init__(self, path: Optional[Path] = None, *, limit: int = MAX_HISTORY) -> None:
        self._path = path or default_history_path()
        self._limit = limit

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.debug("Could not read history %s: %s", self._path, exc)
            return []
        return _normalise(text.splitlines(), self._limit)

    def most_recent(self) -> Optional[str]:
        entries = self.load()
        return entries[0] if entries else None

    def add(self, root: str) -> List[str]:
        """Move `root` to the front (case-insensitive de-duplication) and persist."""
        entries = _normalise([root, *self.load()], self._limit)
        self._store(entries)
        return entries

    def clear(self) -> None:
        self._store([])

    def _store(self, entries: List[str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text("".join(f"{entry}\n" for entry in entries), encoding="utf-8")
        except OSError as exc:
            logger.debug("Could not write history %s: %s", self._path, exc)


__all__ = ["MAX_HISTORY", "PathHistory", "default_history_path"]
