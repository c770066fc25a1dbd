"""Line-pattern reduction of C# sources, used when a syntax tree is not wanted."""

from __future__ import annotations

import re
from typing import List

from .base import first_lines

_FALLBACK_LINES = 20

_USING = re.compile(r"^\s*(global\s+)?using\s+[^(]*?;\s*$")
_ATTRIBUTE = re.compile(r"^\s*\[.*\]\s*$")
_NAMESPACE = re.compile(r"^\s*namespace\s+")

_VISIBILITY = r"(?:public|internal|protected\s+internal)"
_MODIFIERS = r"(?:(?:static|abstract|sealed|partial|virtual|override|async|readonly|unsafe|extern|new|required)\s+)*"
_TYPE = r"[\w<>\[\],.?\s()]+?"

_TYPE_HEADER = re.compile(
    rf"^\s*{_VISIBILITY}\s+{_MODIFIERS}(?:record\s+struct|record\s+class|class|struct|interface|record|enum)\s+\w+"
)
_METHOD = re.compile(
    rf"^\s*{_VISIBILITY}\s+{_MODIFIERS}(?:{_TYPE}\s+)?(?:operator\s*\S+|~?\w+)\s*(?:<[^>]*>)?\s*\(.*\)"
)
_PROPERTY = re.compile(rf"^\s*{_VISIBILITY}\s+{_MODIFIERS}{_TYPE}\s+(?:\w+|this\s*\[.*\])\s*\{{.*\}}")
_EVENT = re.compile(rf"^\s*{_VISIBILITY}\s+{_MODIFIERS}event\s+{_TYPE}\s+\w+\s*;")

_ACCESSOR_BODY = re.compile(r"\b(get|set|init|add|remove)\s*(?:\{[^{}]*\}|=>[^;{}]*;)")
_TRAILING_BODY = re.compile(r"\s*(?:\{.*|=>.*)$")


def _rewrite_method(line: str) -> str:
    signature = _TRAILING_BODY.sub("", line.rstrip())
    return f"{signature.rstrip().rstrip(';')};"


def _rewrite_property(line: str) -> str:
    line = line.rstrip()
    head, _, accessors = line.partition("{")
    accessors = "{" + accessors
    accessors = _ACCESSOR_BODY.sub(lambda match: f"{match.group(1)};", accessors)
    # Drop initializers after the accessor list.
    accessors = accessors[: accessors.rfind("}") + 1]
    return f"{head.rstrip()} {accessors}"


def strip_with_patterns(code: str) -> str:
    """Keep lines that look like public/internal declarations, rewritten without bodies.

    Lines that match no recognised declaration shape are dropped; when nothing
    is kept the first lines of the source are returned.
    """
    kept: List[str] = []
    for line in code.splitlines():
        if _USING.match(line) or _ATTRIBUTE.match(line) or _NAMESPACE.match(line):
            continue
        if _TYPE_HEADER.match(line):
            kept.append(_TRAILING_BODY.sub("", line.rstrip()))
        elif _EVENT.match(line):
            kept.append(line.rstrip())
        elif _PROPERTY.match(line) and "(" not in line.partition("{")[0]:
            kept.append(_rewrite_property(line))
        elif _METHOD.match(line):
            kept.append(_rewrite_method(line))

    if not kept:
        return first_lines(code, _FALLBACK_LINES)
    return "\n".join(kept)


__all__ = ["strip_with_patterns"]
