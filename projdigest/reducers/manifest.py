"""Essentials extraction for MSBuild-style project and config XML files."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple

from ..config import ScanConfiguration
from ..logging import get_logger
from .base import Reducer, first_lines

logger = get_logger("reducers.manifest")

_FALLBACK_LINES = 40


def _detect_xml_namespace(element: ET.Element) -> Optional[str]:
    match = re.match(r"\{(.+)}", element.tag)
    return match.group(1) if match else None


def _unique(values: List[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


class ManifestReducer(Reducer):
    """Keeps target frameworks, project references and package references."""

    name = "manifest"

    def reduce(self, content: str, config: ScanConfiguration) -> str:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as exc:
            logger.debug("%s parse failed, using raw prefix: %s", self.name, exc)
            return first_lines(content, _FALLBACK_LINES)

        namespace = _detect_xml_namespace(root)

        def tag(name: str) -> str:
            return f"{{{namespace}}}{name}" if namespace else name

        frameworks: List[str] = []
        for element in root.iter(tag("TargetFramework")):
            if element.text and element.text.strip():
                frameworks.append(element.text.strip())
        for element in root.iter(tag("TargetFrameworks")):
            if element.text:
                frameworks.extend(part.strip() for part in element.text.split(";") if part.strip())
        frameworks = _unique(frameworks)

        project_refs = [
            include
            for include in (element.get("Include") for element in root.iter(tag("ProjectReference")))
            if include and include.strip()
        ]

        packages: List[Tuple[str, Optional[str]]] = []
        for element in root.iter(tag("PackageReference")):
            package_id = element.get("Include")
            if not package_id or not package_id.strip():
                continue
            version = element.get("Version")
            if version is None:
                nested = element.find(tag("Version"))
                if nested is not None and nested.text:
                    version = nested.text.strip()
            packages.append((package_id, version))

        lines: List[str] = []
        if frameworks:
            lines.append(f"TargetFramework: {', '.join(frameworks)}")
        if project_refs:
            lines.append("ProjectReferences:")
            lines.extend(f"  - {ref}" for ref in project_refs)
        if packages:
            lines.append("PackageReferences:")
            for package_id, version in packages:
                suffix = f" ({version})" if version and version.strip() else ""
                lines.append(f"  - {package_id}{suffix}")

        if not lines:
            return first_lines(content, _FALLBACK_LINES)
        return "\n".join(lines)


__all__ = ["ManifestReducer"]
