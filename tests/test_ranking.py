"""Tests for scoring and two-stage capped selection."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from projdigest.config import ScanConfiguration
from projdigest.models import Category, FileCandidate
from projdigest.ranking import (
    HIGH_SIGNAL_BONUS,
    apply_category_caps,
    apply_global_cap,
    rank,
    score,
    select,
)


def _candidate(relative: str) -> FileCandidate:
    return FileCandidate(
        path=Path("/repo") / relative,
        relative_path=relative,
        extension=PurePosixPath(relative).suffix.lower(),
        depth=relative.count("/"),
    )


def _paths(candidates) -> list[str]:
    return [candidate.relative_path for candidate in candidates]


def test_category_base_scores() -> None:
    config = ScanConfiguration()

    assert score(_candidate("Alpha.cs"), config) == 120
    assert score(_candidate("data.json"), config) == 100
    assert score(_candidate("build.yml"), config) == 40
    assert score(_candidate("Tool.xml"), config) == 10


def test_high_signal_hint_adds_bonus() -> None:
    config = ScanConfiguration()

    assert score(_candidate("src/Program.cs"), config) == 120 + HIGH_SIGNAL_BONUS


def test_directory_segments_add_bonus() -> None:
    config = ScanConfiguration()

    assert score(_candidate("Core/Alpha.cs"), config) == 160
    assert score(_candidate("src/Storage/Alpha.cs"), config) == 170
    assert score(_candidate("Other/Alpha.cs"), config) == 120


def test_razor_companion_is_penalised() -> None:
    config = ScanConfiguration()

    # ".razor" is itself a hint, so the companion keeps the bonus minus the penalty.
    assert score(_candidate("Pages/Index.razor.cs"), config) == 120 + HIGH_SIGNAL_BONUS - 40


def test_rank_orders_by_score_with_stable_ties() -> None:
    candidates = [
        _candidate("b/Alpha.cs"),
        _candidate("a/Beta.cs"),
        _candidate("App.sln"),
        _candidate("Core/Gamma.cs"),
    ]

    ranked = rank(candidates, ScanConfiguration())

    assert _paths(item.candidate for item in ranked) == [
        "App.sln",
        "Core/Gamma.cs",
        "b/Alpha.cs",
        "a/Beta.cs",
    ]


def test_rank_keeps_discovery_order_when_ranking_disabled() -> None:
    candidates = [_candidate("b/Alpha.cs"), _candidate("App.sln")]
    config = ScanConfiguration(only_high_signal=False)

    assert _paths(item.candidate for item in rank(candidates, config)) == [
        "b/Alpha.cs",
        "App.sln",
    ]


def test_category_caps_are_applied_per_category_in_priority_order() -> None:
    config = ScanConfiguration(
        category_caps={Category.SOURCE: 2, Category.STRUCTURED_DATA: 1}
    )
    ordered = [
        _candidate("One.cs"),
        _candidate("one.json"),
        _candidate("Two.cs"),
        _candidate("two.json"),
        _candidate("Three.cs"),
        _candidate("App.sln"),
    ]

    merged = apply_category_caps(ordered, config)

    assert _paths(merged) == ["App.sln", "One.cs", "Two.cs", "one.json"]


def test_global_cap_truncates_merged_sequence() -> None:
    config = ScanConfiguration(global_max_files=2)
    merged = [_candidate("App.sln"), _candidate("One.cs"), _candidate("Two.cs")]

    assert _paths(apply_global_cap(merged, config)) == ["App.sln", "One.cs"]


def test_select_respects_both_caps() -> None:
    config = ScanConfiguration(
        global_max_files=3, category_caps={Category.SOURCE: 2}
    )
    candidates = [_candidate(f"File{index}.cs") for index in range(5)]
    candidates.append(_candidate("settings.json"))
    candidates.append(_candidate("App.csproj"))

    selected = select(candidates, config)

    assert _paths(selected) == ["App.csproj", "File0.cs", "File1.cs"]
