"""Content reducers and the category-based registry that selects them."""

from __future__ import annotations

from typing import Callable, Dict

from ..config import ScanConfiguration
from ..logging import get_logger
from ..models import Category
from .base import Reducer, first_lines, truncation_marker
from .manifest import ManifestReducer
from .markup import MarkupReducer, SolutionReducer
from .passthrough import LineCapReducer
from .signatures import SignatureReducer
from .structured import JsonSummaryReducer

logger = get_logger("reducers")

_BUILTIN_FACTORIES: Dict[Category, Callable[[], Reducer]] = {
    Category.SOLUTION_MANIFEST: SolutionReducer,
    Category.PROJECT_MANIFEST: ManifestReducer,
    Category.SOURCE: SignatureReducer,
    Category.STRUCTURED_DATA: JsonSummaryReducer,
    Category.MARKUP_TEMPLATE: MarkupReducer,
    Category.CONFIG_MANIFEST: ManifestReducer,
    Category.CONFIG_DATA: LineCapReducer,
}


class ReducerRegistry:
    """Resolves and caches the reducer used for each category."""

    def __init__(self, config: ScanConfiguration) -> None:
        self._config = config
        self._instances: Dict[Category, Reducer] = {}
        self._passthrough = LineCapReducer()

    def reducer_for(self, category: Category) -> Reducer:
        if not self._config.reduce_content:
            return self._passthrough
        if category is Category.SOURCE and not self._config.strip_source_to_signatures:
            return self._passthrough
        reducer = self._instances.get(category)
        if reducer is None:
            factory = _BUILTIN_FACTORIES.get(category, LineCapReducer)
            reducer = factory()
            logger.debug("Using %s reducer for %s files", reducer.name, category.value)
            self._instances[category] = reducer
        return reducer

    def reduce(self, category: Category, content: str) -> str:
        """Reduce `content` for `category`, then apply the per-file line cap."""
        reduced = self.reducer_for(category).reduce(content, self._config)
        return first_lines(reduced, self._config.max_lines_per_file)


__all__ = [
    "JsonSummaryReducer",
    "LineCapReducer",
    "ManifestReducer",
    "MarkupReducer",
    "Reducer",
    "ReducerRegistry",
    "SignatureReducer",
    "SolutionReducer",
    "first_lines",
    "truncation_marker",
]
