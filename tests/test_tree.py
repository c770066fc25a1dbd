"""Tests for the collapsed directory summary and full tree listing."""

from __future__ import annotations

from projdigest.config import ScanConfiguration
from projdigest.tree import build_summary, render_full_tree, summarize


def test_summary_collapses_single_child_chains(project) -> None:
    project.write(
        {
            "src/App/Program.cs": "",
            "src/App/Views/Main.cs": "",
            "src/Lib/Util.cs": "",
            "bin/Out.cs": "",
            "README.md": "",
        }
    )

    text = summarize(project.path(), ScanConfiguration())

    assert text.splitlines() == [
        "📁 project/src (0 files)",
        "   📁 App/Views (1 files)",
        "   📁 Lib (1 files)",
    ]


def test_summary_counts_only_included_files(project) -> None:
    project.write(
        {
            "a/One.cs": "",
            "a/One.g.cs": "",
            "a/notes.txt": "",
            "b/Two.json": "",
        }
    )

    node = build_summary(project.path(), ScanConfiguration())

    assert node.display_path == "project"
    assert [(child.display_path, child.file_count) for child in node.children] == [
        ("a", 1),
        ("b", 1),
    ]


def test_summary_elides_beyond_max_depth(project) -> None:
    project.write({"a/x/One.cs": "", "b/y/Two.cs": ""})
    config = ScanConfiguration(max_tree_depth=1)

    text = summarize(project.path(), config)

    assert text.splitlines() == [
        "📁 project (0 files)",
        "   📁 a (0 files)",
        "      …",
        "   📁 b (0 files)",
        "      …",
    ]


def test_summary_of_empty_root_is_single_line(project) -> None:
    assert summarize(project.path(), ScanConfiguration()) == "📁 project (0 files)"


def test_full_tree_lists_files_and_caps_per_directory(project) -> None:
    project.write(
        {
            "A.cs": "",
            "B.cs": "",
            "C.cs": "",
            "sub/D.json": "",
            "obj/E.cs": "",
        }
    )
    config = ScanConfiguration(max_files_per_directory=2)

    text = render_full_tree(project.path(), config)

    assert text.splitlines() == [
        "📁 project",
        "   ├─📄 A.cs",
        "   ├─📄 B.cs",
        "   ├─… (1 more files)",
        "   📁 sub",
        "      ├─📄 D.json",
    ]
