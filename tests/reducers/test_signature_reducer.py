"""Tests for C# signature extraction in syntax and pattern modes."""

from __future__ import annotations

import pytest

from projdigest.config import ScanConfiguration
from projdigest.reducers import SignatureReducer
from projdigest.reducers.signature_patterns import strip_with_patterns

WIDGET_SOURCE = """\
using System;
using System.Collections.Generic;

namespace Demo.Core
{
    [Serializable]
    public class Widget : IDisposable
    {
        private readonly List<string> _items = new List<string>();
        private int _count;

        public Widget(int count) : base()
        {
            _count = count;
            Console.WriteLine("created");
        }

        ~Widget()
        {
            Console.WriteLine("finalized");
        }

        public int Count
        {
            get { return _count; }
            private set { _count = value; }
        }

        public string Name { get; init; } = "widget";

        public int Double => _count * 2;

        public string this[int index]
        {
            get { return _items[index]; }
        }

        public event EventHandler Changed;

        [Obsolete]
        public void Add(string item)
        {
            _items.Add(item);
            Changed?.Invoke(this, EventArgs.Empty);
        }

        public int Sum(int a, int b) => a + b;

        public static Widget operator +(Widget left, Widget right)
        {
            return new Widget(left._count + right._count);
        }

        private void Hidden()
        {
            Console.WriteLine("hidden");
        }

        public void Dispose()
        {
            _items.Clear();
        }
    }

    internal interface IStore
    {
        void Save(string key);

        string Describe()
        {
            return "store";
        }
    }

    class Helper
    {
        void Secret() { }
    }
}
"""


@pytest.fixture
def syntax_output() -> list[str]:
    result = SignatureReducer().reduce(WIDGET_SOURCE, ScanConfiguration())
    return [line.strip() for line in result.splitlines()]


def test_syntax_mode_keeps_public_members_without_bodies(syntax_output: list[str]) -> None:
    expected = [
        "public class Widget : IDisposable",
        "public Widget(int count) : base();",
        "~Widget();",
        "public int Count { get; private set; }",
        "public string Name { get; init; }",
        "public int Double { get; }",
        "public string this[int index] { get; }",
        "public event EventHandler Changed;",
        "public void Add(string item);",
        "public int Sum(int a, int b);",
        "public static Widget operator +(Widget left, Widget right);",
        "public void Dispose();",
    ]
    for line in expected:
        assert line in syntax_output


def test_syntax_mode_removes_statements_and_noise(syntax_output: list[str]) -> None:
    text = "\n".join(syntax_output)

    assert "Console" not in text
    assert "return" not in text
    assert "_count" not in text
    assert "using System" not in text
    assert "namespace" not in text
    assert "Serializable" not in text
    assert "Obsolete" not in text
    assert "Hidden" not in text


def test_syntax_mode_interface_members_default_to_visible(syntax_output: list[str]) -> None:
    assert "internal interface IStore" in syntax_output
    assert "void Save(string key);" in syntax_output
    assert "string Describe();" in syntax_output


def test_syntax_mode_top_level_type_without_modifier_is_internal(
    syntax_output: list[str],
) -> None:
    assert "class Helper" in syntax_output
    assert not any("Secret" in line for line in syntax_output)


def test_syntax_mode_indents_members_inside_braces() -> None:
    source = "public class A\n{\n    public void Run()\n    {\n        Go();\n    }\n}\n"

    result = SignatureReducer().reduce(source, ScanConfiguration())

    assert result.splitlines() == ["public class A", "{", "    public void Run();", "}"]


def test_enum_members_are_listed() -> None:
    source = "public enum Color\n{\n    Red = 1,\n    Green,\n}\n"

    result = SignatureReducer().reduce(source, ScanConfiguration())

    assert result == "public enum Color { Red, Green }"


def test_unrecognised_source_falls_back_to_prefix() -> None:
    source = 'Console.WriteLine("hello");\n'

    result = SignatureReducer().reduce(source, ScanConfiguration())

    assert result == source


def test_pattern_mode_rewrites_declaration_lines() -> None:
    config = ScanConfiguration(signature_mode="pattern")

    result = SignatureReducer().reduce(WIDGET_SOURCE, config)

    lines = [line.strip() for line in result.splitlines()]
    assert "public class Widget : IDisposable" in lines
    assert "public Widget(int count) : base();" in lines
    assert "public void Add(string item);" in lines
    assert "public int Sum(int a, int b);" in lines
    assert "public string Name { get; init; }" in lines
    assert "public event EventHandler Changed;" in lines
    assert "internal interface IStore" in lines
    assert "Console" not in result
    assert "using System" not in result
    assert "namespace" not in result
    assert "Hidden" not in result


def test_pattern_mode_falls_back_to_first_lines() -> None:
    code = "\n".join(f"var x{index} = {index};" for index in range(25))

    result = strip_with_patterns(code)

    lines = result.splitlines()
    assert lines[0] == "var x0 = 0;"
    assert len(lines) == 21
    assert lines[-1] == "[truncated > 20 lines, 5 more]"
