"""Structural summary of JSON documents."""

from __future__ import annotations

import json
from collections import deque
from typing import Any, Deque, List, Tuple

from ..config import ScanConfiguration
from ..logging import get_logger
from .base import Reducer, first_lines

logger = get_logger("reducers.structured")

_FALLBACK_LINES = 50


def type_tag(value: Any) -> str:
    """Return the summary tag for a parsed JSON value."""
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if value is None:
        return "null"
    return "value"


def _has_container_head(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and isinstance(value[0], (dict, list))


class JsonSummaryReducer(Reducer):
    """Emits one `path: type` line per key, breadth-first, within depth/entry limits.

    Keys directly under the document root have depth 0; a key is emitted when
    its depth is below ``json_max_depth``. Arrays report their length and
    summarise their first element one level deeper when it is an object or
    an array.
    """

    name = "json-summary"

    def reduce(self, content: str, config: ScanConfiguration) -> str:
        try:
            document = json.loads(content)
        except (ValueError, RecursionError) as exc:
            logger.debug("%s fell back to raw prefix: %s", self.name, exc)
            return first_lines(content, _FALLBACK_LINES)
        lines = self.summarize(document, config.json_max_depth, config.json_max_entries)
        return "\n".join(["{ // summary", *lines, "}"])

    @staticmethod
    def summarize(document: Any, max_depth: int, max_entries: int) -> List[str]:
        lines: List[str] = []
        queue: Deque[Tuple[Any, str, int]] = deque([(document, "", 0)])

        def emit(line: str) -> bool:
            if len(lines) >= max_entries:
                return False
            lines.append(f"  {line}")
            return True

        truncated = False
        while queue and not truncated:
            value, prefix, depth = queue.popleft()
            if isinstance(value, dict):
                for key, child in value.items():
                    tag = type_tag(child)
                    if isinstance(child, list):
                        tag = f"array({len(child)})"
                    if not emit(f"{prefix}{key}: {tag}"):
                        truncated = True
                        break
                    if depth + 1 >= max_depth:
                        continue
                    if isinstance(child, dict):
                        queue.append((child, f"{prefix}{key}.", depth + 1))
                    elif _has_container_head(child):
                        queue.append((child[0], f"{prefix}{key}[0].", depth + 1))
            elif isinstance(value, list):
                if not emit(f"{prefix}[ ]: array({len(value)})"):
                    truncated = True
                elif depth + 1 < max_depth and _has_container_head(value):
                    queue.append((value[0], f"{prefix}[0].", depth + 1))
            elif not lines:
                emit(f"{prefix}(root): {type_tag(value)}")

        if truncated:
            lines.append(f"  … (limited to {max_entries} entries)")
        return lines


__all__ = ["JsonSummaryReducer", "type_tag"]
