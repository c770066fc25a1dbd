"""Reducers for solution files and Razor-style markup templates."""

from __future__ import annotations

from typing import List

from ..config import ScanConfiguration
from .base import Reducer, first_lines, split_lines

_PROJECT_MARKER = "project("
_DIRECTIVES = ("@page", "@inject", "@layout")
_MARKUP_PREFIX_LINES = 30


class SolutionReducer(Reducer):
    """Keeps only the project declaration lines of a solution file."""

    name = "solution"

    def reduce(self, content: str, config: ScanConfiguration) -> str:
        projects = [
            line.rstrip()
            for line in split_lines(content)
            if line.lstrip().lower().startswith(_PROJECT_MARKER)
        ]
        return "\n".join(["# Projects", *projects])


class MarkupReducer(Reducer):
    """Lists page/inject/layout directives, then a short prefix of the template."""

    name = "markup"

    def reduce(self, content: str, config: ScanConfiguration) -> str:
        directives: List[str] = [
            line.rstrip()
            for line in split_lines(content)
            if line.lstrip().startswith(_DIRECTIVES)
        ]
        parts: List[str] = []
        if directives:
            parts.append("// Directives:")
            parts.extend(directives)
            parts.append("")
        parts.append(first_lines(content, _MARKUP_PREFIX_LINES))
        return "\n".join(parts)


__all__ = ["MarkupReducer", "SolutionReducer"]
