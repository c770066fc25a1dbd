"""Directory tree views: full listing and collapsed summary."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from .config import ScanConfiguration
from .filters import PathFilter
from .models import DirectoryNode
from .walker import DirectoryListing, read_directory

ELLIPSIS = "…"
_INDENT = "   "


def _display_name(directory: Path) -> str:
    return directory.name or str(directory)


def _eligible_directories(listing: DirectoryListing, path_filter: PathFilter) -> List[Path]:
    return [
        directory
        for directory in listing.directories
        if not path_filter.is_excluded_directory(directory.name)
    ]


def _included_files(listing: DirectoryListing, path_filter: PathFilter) -> List[Path]:
    return [path for path in listing.files if path_filter.is_included(path.name)]


def build_summary(root: Path, config: ScanConfiguration) -> DirectoryNode:
    """Build the collapsed tree: single-child chains joined, file counts per chain end."""
    path_filter = PathFilter(config)
    root = Path(root)
    max_depth = config.max_tree_depth

    top: List[DirectoryNode] = []
    stack: List[Tuple[Path, List[DirectoryNode], int]] = [(root, top, 0)]

    while stack:
        directory, siblings, depth = stack.pop()

        chain = [_display_name(directory)]
        current = directory
        listing = read_directory(current)
        subdirectories = _eligible_directories(listing, path_filter)
        while len(subdirectories) == 1 and depth < max_depth:
            current = subdirectories[0]
            depth += 1
            chain.append(current.name)
            listing = read_directory(current)
            subdirectories = _eligible_directories(listing, path_filter)

        node = DirectoryNode(
            display_path="/".join(chain),
            file_count=len(_included_files(listing, path_filter)),
        )
        siblings.append(node)

        if not subdirectories:
            continue
        if depth >= max_depth:
            node.children.append(DirectoryNode(display_path=ELLIPSIS, elided=True))
            continue
        for child in reversed(subdirectories):
            stack.append((child, node.children, depth + 1))

    return top[0]


def format_summary(node: DirectoryNode) -> str:
    """Render a summary tree built by :func:`build_summary`."""
    lines: List[str] = []
    stack: List[Tuple[DirectoryNode, str]] = [(node, "")]
    while stack:
        current, indent = stack.pop()
        if current.elided:
            lines.append(f"{indent}{ELLIPSIS}")
            continue
        lines.append(f"{indent}📁 {current.display_path} ({current.file_count} files)")
        for child in reversed(current.children):
            stack.append((child, indent + _INDENT))
    return "\n".join(lines)


def summarize(root: Path, config: ScanConfiguration) -> str:
    """Return the collapsed directory summary for `root` as text."""
    return format_summary(build_summary(root, config))


def render_full_tree(root: Path, config: ScanConfiguration) -> str:
    """Return a full listing of directories and in-scope files below `root`."""
    path_filter = PathFilter(config)
    root = Path(root)
    lines: List[str] = []
    stack: List[Tuple[Path, str, int]] = [(root, "", 0)]

    while stack:
        directory, indent, depth = stack.pop()
        lines.append(f"{indent}📁 {_display_name(directory)}")

        listing = read_directory(directory)
        files = _included_files(listing, path_filter)
        shown = files[: config.max_files_per_directory]
        for path in shown:
            lines.append(f"{indent}{_INDENT}├─📄 {path.name}")
        hidden = len(files) - len(shown)
        if hidden:
            lines.append(f"{indent}{_INDENT}├─{ELLIPSIS} ({hidden} more files)")

        subdirectories = _eligible_directories(listing, path_filter)
        if not subdirectories:
            continue
        if depth >= config.max_tree_depth:
            lines.append(f"{indent}{_INDENT}{ELLIPSIS}")
            continue
        for child in reversed(subdirectories):
            stack.append((child, indent + _INDENT, depth + 1))

    return "\n".join(lines)


__all__ = ["ELLIPSIS", "build_summary", "format_summary", "render_full_tree", "summarize"]
