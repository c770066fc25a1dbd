"""Tests for the recent-paths history store."""

from __future__ import annotations

from pathlib import Path

from projdigest.history import PathHistory, default_history_path


def test_default_path_follows_environment(isolated_history: Path) -> None:
    assert default_history_path() == isolated_history / "history.txt"


def test_add_moves_entry_to_front_without_duplicates(tmp_path: Path) -> None:
    history = PathHistory(tmp_path / "history.txt")

    history.add("/work/alpha")
    history.add("/work/beta")
    entries = history.add("/WORK/ALPHA")

    assert entries == ["/WORK/ALPHA", "/work/beta"]
    assert history.load() == entries
    assert history.most_recent() == "/WORK/ALPHA"


def test_history_is_limited(tmp_path: Path) -> None:
    history = PathHistory(tmp_path / "history.txt", limit=3)

    for index in range(5):
        history.add(f"/work/{index}")

    assert history.load() == ["/work/4", "/work/3", "/work/2"]


def test_missing_file_and_clear(tmp_path: Path) -> None:
    history = PathHistory(tmp_path / "nested" / "history.txt")

    assert history.load() == []
    assert history.most_recent() is None

    history.add("/work/alpha")
    history.clear()

    assert history.load() == []


def test_unwritable_location_is_ignored(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    history = PathHistory(blocker / "history.txt")

    assert history.add("/work/alpha") == ["/work/alpha"]
    assert history.load() == []
