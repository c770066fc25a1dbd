"""Iterative file-system traversal producing in-scope file candidates."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import ScanConfiguration
from .filters import PathFilter
from .logging import get_logger
from .models import FileCandidate

logger = get_logger("walker")


class ScanCancelled(RuntimeError):
    """Raised when a scan is aborted through its cancellation event."""


@dataclass(frozen=True)
class DirectoryListing:
    """Sorted file and subdirectory entries of one directory."""

    files: Tuple[Path, ...] = ()
    directories: Tuple[Path, ...] = ()


def read_directory(path: Path) -> DirectoryListing:
    """List `path` without raising; unreadable directories yield an empty listing."""
    files: List[Path] = []
    directories: List[Path] = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        directories.append(Path(entry.path))
                    elif entry.is_file():
                        files.append(Path(entry.path))
                except OSError:
                    continue
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", path, exc)
        return DirectoryListing()

    files.sort(key=lambda item: item.name)
    directories.sort(key=lambda item: item.name)
    return DirectoryListing(files=tuple(files), directories=tuple(directories))


class TreeWalker:
    """Walks a directory tree with an explicit stack instead of recursion."""

    def __init__(
        self,
        config: ScanConfiguration,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self._filter = PathFilter(config)
        self._cancel_event = cancel_event

    def walk(self, root: Path, *, max_depth: Optional[int] = None) -> Iterator[FileCandidate]:
        """Yield in-scope files below `root` in pre-order, alphabetical per directory."""
        root = Path(root)
        stack: List[Tuple[Path, int]] = [(root, 0)]

        while stack:
            if self._cancel_event is not None and self._cancel_event.is_set():
                raise ScanCancelled(f"Scan of {root} was cancelled")

            current, depth = stack.pop()
            listing = read_directory(current)

            for file_path in listing.files:
                if not self._filter.is_included(file_path.name):
                    continue
                yield FileCandidate(
                    path=file_path,
                    relative_path=file_path.relative_to(root).as_posix(),
                    extension=file_path.suffix.lower(),
                    depth=depth,
                )

            if max_depth is not None and depth >= max_depth:
                continue

            # Reverse so the stack pops subdirectories in name order.
            for directory in reversed(listing.directories):
                if self._filter.is_excluded_directory(directory.name):
                    continue
                stack.append((directory, depth + 1))


__all__ = ["DirectoryListing", "ScanCancelled", "TreeWalker", "read_directory"]
