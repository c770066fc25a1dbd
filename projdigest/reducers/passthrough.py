"""Line-capped passthrough reducer."""

from __future__ import annotations

from ..config import ScanConfiguration
from .base import Reducer, first_lines


class LineCapReducer(Reducer):
    """Keeps the first `max_lines_per_file` lines verbatim."""

    name = "passthrough"

    def reduce(self, content: str, config: ScanConfiguration) -> str:
        return first_lines(content, config.max_lines_per_file)


__all__ = ["LineCapReducer"]
