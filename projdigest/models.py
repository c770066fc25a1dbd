"""Core data models shared across projdigest components."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Tuple


class Category(str, Enum):
    """Grouping of file extensions sharing a selection cap and a reducer."""

    SOLUTION_MANIFEST = "solution-manifest"
    PROJECT_MANIFEST = "project-manifest"
    SOURCE = "source"
    STRUCTURED_DATA = "structured-data"
    MARKUP_TEMPLATE = "markup-template"
    CONFIG_MANIFEST = "config-manifest"
    CONFIG_DATA = "config-data"


# Concatenation order used when merging per-category selections.
CATEGORY_PRIORITY: Tuple[Category, ...] = (
    Category.SOLUTION_MANIFEST,
    Category.PROJECT_MANIFEST,
    Category.SOURCE,
    Category.STRUCTURED_DATA,
    Category.MARKUP_TEMPLATE,
    Category.CONFIG_MANIFEST,
    Category.CONFIG_DATA,
)


@dataclass(frozen=True)
class FileCandidate:
    """A discovered in-scope file."""

    path: Path
    relative_path: str
    extension: str
    depth: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ScoredFile:
    """Candidate annotated with its ranking score and discovery position."""

    candidate: FileCandidate
    score: int
    index: int


@dataclass
class DirectoryNode:
    """Node of the collapsed directory summary."""

    display_path: str
    file_count: int = 0
    children: List["DirectoryNode"] = field(default_factory=list)
    elided: bool = False


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a full scan: rendered text plus selection statistics."""

    text: str
    discovered: int
    selected: Tuple[FileCandidate, ...]
    generated_at: datetime
