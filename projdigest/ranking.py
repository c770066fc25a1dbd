"""Scoring and budgeted selection of discovered files."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .config import ScanConfiguration
from .models import CATEGORY_PRIORITY, Category, FileCandidate, ScoredFile

CATEGORY_BASE_SCORES: Mapping[Category, int] = {
    Category.SOLUTION_MANIFEST: 200,
    Category.PROJECT_MANIFEST: 180,
    Category.SOURCE: 120,
    Category.STRUCTURED_DATA: 100,
    Category.MARKUP_TEMPLATE: 60,
    Category.CONFIG_DATA: 40,
    Category.CONFIG_MANIFEST: 10,
}

HIGH_SIGNAL_BONUS = 120

# Case-insensitive substrings of the file name; each match adds HIGH_SIGNAL_BONUS.
HIGH_SIGNAL_HINTS: Tuple[str, ...] = (
    "program.cs",
    "startup.cs",
    "app.xaml.cs",
    "abstractions",
    "contracts",
    "interfaces",
    "models",
    "settings",
    "dpapi",
    "storage",
    "memorystore",
    "sqlite",
    "dbcontext",
    "repository",
    "inmemorybus",
    "messagebus",
    "provider",
    "bridge",
    "shellviewmodel",
    "chatpaneviewmodel",
    "settingsviewmodel",
    "viewmodel",
    ".sln",
    ".csproj",
    "appsettings",
    ".razor",
    "servicecollection",
    "di",
)

# Directory segment (case-insensitive) -> bonus.
SEGMENT_BONUSES: Mapping[str, int] = {
    "core": 40,
    "providers": 40,
    "app": 30,
    "viewmodels": 30,
    "storage": 50,
}

# File name suffix -> penalty for generated-looking companion files.
PENALTY_SUFFIXES: Mapping[str, int] = {
    ".razor.cs": 40,
}


def score(candidate: FileCandidate, config: ScanConfiguration) -> int:
    """Return the ranking score of a candidate (higher is more important)."""
    name = candidate.name.lower()
    total = CATEGORY_BASE_SCORES.get(config.category_for(candidate.extension), 0)

    total += HIGH_SIGNAL_BONUS * sum(1 for hint in HIGH_SIGNAL_HINTS if hint in name)

    segments = candidate.relative_path.replace("\\", "/").lower().split("/")[:-1]
    for segment, bonus in SEGMENT_BONUSES.items():
        if segment in segments:
            total += bonus

    for suffix, penalty in PENALTY_SUFFIXES.items():
        if name.endswith(suffix):
            total -= penalty
    return total


def rank(candidates: Iterable[FileCandidate], config: ScanConfiguration) -> List[ScoredFile]:
    """Order candidates by score (descending) when high-signal ranking is on.

    Ties, and the whole order when ranking is off, follow discovery order.
    """
    scored = [
        ScoredFile(
            candidate=candidate,
            score=score(candidate, config) if config.only_high_signal else 0,
            index=index,
        )
        for index, candidate in enumerate(candidates)
    ]
    if config.only_high_signal:
        scored = sorted(scored, key=lambda item: (-item.score, item.index))
    return scored


def apply_category_caps(
    ordered: Sequence[FileCandidate], config: ScanConfiguration
) -> List[FileCandidate]:
    """Slice each category to its cap and concatenate in priority order."""
    buckets: Dict[Category, List[FileCandidate]] = {category: [] for category in CATEGORY_PRIORITY}
    for candidate in ordered:
        buckets.setdefault(config.category_for(candidate.extension), []).append(candidate)

    merged: List[FileCandidate] = []
    seen = set()
    for category in CATEGORY_PRIORITY:
        for candidate in buckets[category][: config.cap_for(category)]:
            if candidate.path in seen:
                continue
            seen.add(candidate.path)
            merged.append(candidate)
    return merged


def apply_global_cap(
    merged: Sequence[FileCandidate], config: ScanConfiguration
) -> List[FileCandidate]:
    return list(merged[: config.global_max_files])


def select(candidates: Iterable[FileCandidate], config: ScanConfiguration) -> List[FileCandidate]:
    """Pick the budgeted, ordered subset of files to render."""
    ordered = [item.candidate for item in rank(candidates, config)]
    return apply_global_cap(apply_category_caps(ordered, config), config)


__all__ = [
    "CATEGORY_BASE_SCORES",
    "HIGH_SIGNAL_BONUS",
    "HIGH_SIGNAL_HINTS",
    "PENALTY_SUFFIXES",
    "SEGMENT_BONUSES",
    "apply_category_caps",
    "apply_global_cap",
    "rank",
    "score",
    "select",
]
