"""Predicates deciding which files and directories take part in a scan."""

from __future__ import annotations

from pathlib import PurePath
from typing import Union

from .config import ScanConfiguration

PathLike = Union[str, PurePath]


class PathFilter:
    """Extension allow-list, generated-file suffixes and directory exclusions."""

    def __init__(self, config: ScanConfiguration) -> None:
        self._extensions = config.allowed_extensions
        self._excluded_dirs = config.excluded_directory_names
        self._generated_suffixes = tuple(sorted(config.generated_file_suffixes))

    def is_included(self, path: PathLike) -> bool:
        """Return True when the file has an allowed extension and is not generated."""
        name = PurePath(path).name.lower()
        extension = PurePath(name).suffix
        if not extension or extension not in self._extensions:
            return False
        return not self.is_generated(name)

    def is_generated(self, path: PathLike) -> bool:
        name = PurePath(path).name.lower()
        return bool(self._generated_suffixes) and name.endswith(self._generated_suffixes)

    def is_excluded_directory(self, name: str) -> bool:
        return name.lower() in self._excluded_dirs


__all__ = ["PathFilter"]
