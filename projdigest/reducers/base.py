"""Base class and shared text helpers for content reducers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..config import ScanConfiguration


class Reducer(ABC):
    """Contract for transforms from raw file content to a shortened representation."""

    name: str = "reducer"

    @abstractmethod
    def reduce(self, content: str, config: ScanConfiguration) -> str:
        """Return the reduced form of `content`; must not raise on malformed input."""


def truncation_marker(limit: int, omitted: int) -> str:
    return f"[truncated > {limit} lines, {omitted} more]"


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; a single trailing newline does not start a line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def first_lines(text: str, max_lines: int) -> str:
    """Return `text` unchanged if it fits, else its first lines plus a marker line.

    Lines are ``\\n``-separated; other separators such as form feeds stay
    inside their line.
    """
    lines = split_lines(text)
    if len(lines) <= max_lines:
        return text
    kept = "\n".join(lines[:max_lines])
    return f"{kept}\n{truncation_marker(max_lines, len(lines) - max_lines)}"


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


__all__ = ["Reducer", "collapse_whitespace", "first_lines", "split_lines", "truncation_marker"]
