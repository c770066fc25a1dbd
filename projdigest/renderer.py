"""Assembly of the final digest text."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ScanConfiguration
from .logging import get_logger
from .models import FileCandidate
from .reducers import ReducerRegistry
from .tree import render_full_tree, summarize

logger = get_logger("renderer")

TOOL_NAME = "projdigest"
TOOL_VERSION = "0.4.0"

SECTION_RULE = "═" * 80
FILE_RULE = "─" * 47
TREE_HEADER = "📁 Directory structure:"
CONTENTS_HEADER = "📜 File contents:"


def byte_truncation_marker(max_bytes: int) -> str:
    return f"[truncated > {max_bytes} bytes]"


def read_file_limited(path: Path, max_bytes: int) -> str:
    """Read at most `max_bytes` bytes of `path` as text, marking truncation.

    Raises ``OSError`` when the file cannot be read.
    """
    with path.open("rb") as handle:
        data = handle.read(max_bytes + 1)
    truncated = len(data) > max_bytes
    if truncated:
        data = data[:max_bytes]
    text = data.decode("utf-8-sig", errors="replace")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if truncated:
        text = f"{text}\n{byte_truncation_marker(max_bytes)}"
    return text


class Renderer:
    """Renders the banner, tree and per-file sections of a digest."""

    def __init__(self, config: ScanConfiguration) -> None:
        self._config = config
        self._reducers = ReducerRegistry(config)

    def render(
        self,
        root: Path,
        selected: Sequence[FileCandidate],
        *,
        discovered: Optional[int] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        config = self._config
        root = Path(root)
        generated_at = generated_at or datetime.now()
        discovered = len(selected) if discovered is None else discovered

        lines: List[str] = [
            f"{TOOL_NAME} v{TOOL_VERSION}",
            f"Project: {root}",
            f"Scan date: {generated_at:%Y-%m-%d %H:%M:%S}",
            f"Options: {', '.join(config.describe())}",
            f"Discovered files: {discovered} | Snapshots selected: {len(selected)}",
            SECTION_RULE,
        ]

        if config.include_tree:
            tree = summarize(root, config) if config.tree_summary_only else render_full_tree(root, config)
            lines.extend([TREE_HEADER, tree, ""])

        if config.include_file_contents:
            lines.extend([SECTION_RULE, CONTENTS_HEADER])
            for candidate in selected:
                lines.extend(self.render_file(candidate))

        return "\n".join(lines) + "\n"

    def render_file(self, candidate: FileCandidate) -> List[str]:
        """Return the lines of one file section (header, content, trailing blank)."""
        return [
            FILE_RULE,
            f"📄 {candidate.relative_path}",
            FILE_RULE,
            self.file_content(candidate),
            "",
        ]

    def file_content(self, candidate: FileCandidate) -> str:
        config = self._config
        try:
            raw = read_file_limited(candidate.path, config.max_bytes_per_file)
        except OSError as exc:
            logger.warning("Failed to read %s: %s", candidate.relative_path, exc)
            return f"[File read error: {exc.strerror or exc}]"
        category = config.category_for(candidate.extension)
        return self._reducers.reduce(category, raw).rstrip("\n")


def render(
    root: Path,
    selected: Sequence[FileCandidate],
    config: ScanConfiguration,
    *,
    discovered: Optional[int] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render a digest for `selected` files under `root`."""
    return Renderer(config).render(
        root, selected, discovered=discovered, generated_at=generated_at
    )


__all__ = [
    "CONTENTS_HEADER",
    "FILE_RULE",
    "Renderer",
    "SECTION_RULE",
    "TREE_HEADER",
    "read_file_limited",
    "render",
]
