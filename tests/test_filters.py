"""Tests for projdigest.filters."""

from __future__ import annotations

from pathlib import Path

from projdigest.config import ScanConfiguration
from projdigest.filters import PathFilter


def _filter() -> PathFilter:
    return PathFilter(ScanConfiguration())


def test_allowed_extensions_are_case_insensitive() -> None:
    path_filter = _filter()

    assert path_filter.is_included("Program.cs")
    assert path_filter.is_included(Path("src") / "App.CSPROJ")
    assert path_filter.is_included("appsettings.Json")
    assert not path_filter.is_included("README.md")


def test_files_without_extension_are_never_included() -> None:
    path_filter = _filter()

    assert not path_filter.is_included("Makefile")
    assert not path_filter.is_included(".gitignore")


def test_generated_suffixes_compare_full_file_name() -> None:
    path_filter = _filter()

    assert not path_filter.is_included("MainWindow.g.cs")
    assert not path_filter.is_included("MainWindow.g.i.cs")
    assert not path_filter.is_included("Form1.Designer.cs")
    assert path_filter.is_included("Designer.cs")


def test_excluded_directories_ignore_case() -> None:
    path_filter = _filter()

    assert path_filter.is_excluded_directory("bin")
    assert path_filter.is_excluded_directory("OBJ")
    assert path_filter.is_excluded_directory("Node_Modules")
    assert not path_filter.is_excluded_directory("src")
