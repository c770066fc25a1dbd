"""Scan configuration and loading of project overrides (.projdigest.yml)."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence

import yaml

from .models import Category

CONFIG_FILENAME = ".projdigest.yml"

DEFAULT_EXTENSIONS = (
    ".cs",
    ".json",
    ".razor",
    ".csproj",
    ".sln",
    ".xml",
    ".config",
    ".yml",
    ".yaml",
)

DEFAULT_EXCLUDED_DIRS = ("bin", "obj", ".git", ".vs", "node_modules", ".idea")

DEFAULT_GENERATED_SUFFIXES = (".g.cs", ".g.i.cs", ".designer.cs")

DEFAULT_CATEGORY_BY_EXTENSION: Dict[str, Category] = {
    ".sln": Category.SOLUTION_MANIFEST,
    ".csproj": Category.PROJECT_MANIFEST,
    ".cs": Category.SOURCE,
    ".json": Category.STRUCTURED_DATA,
    ".razor": Category.MARKUP_TEMPLATE,
    ".xml": Category.CONFIG_MANIFEST,
    ".config": Category.CONFIG_MANIFEST,
    ".yml": Category.CONFIG_DATA,
    ".yaml": Category.CONFIG_DATA,
}

DEFAULT_CATEGORY_CAPS: Dict[Category, int] = {
    Category.SOLUTION_MANIFEST: 1,
    Category.PROJECT_MANIFEST: 12,
    Category.SOURCE: 90,
    Category.STRUCTURED_DATA: 40,
    Category.MARKUP_TEMPLATE: 20,
    Category.CONFIG_MANIFEST: 10,
    Category.CONFIG_DATA: 10,
}

SIGNATURE_MODES = ("syntax", "pattern")

# Caps used by the full-export preset: large enough to behave as "everything".
_EXPORT_LIMIT = 1_000_000


class ConfigError(ValueError):
    """Raised when a scan configuration is invalid or cannot be parsed."""


@dataclass(frozen=True)
class ScanConfiguration:
    """Immutable settings for one scan."""

    allowed_extensions: FrozenSet[str] = frozenset(DEFAULT_EXTENSIONS)
    excluded_directory_names: FrozenSet[str] = frozenset(DEFAULT_EXCLUDED_DIRS)
    generated_file_suffixes: FrozenSet[str] = frozenset(DEFAULT_GENERATED_SUFFIXES)
    category_caps: Mapping[Category, int] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_CAPS), hash=False
    )
    category_by_extension: Mapping[str, Category] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_BY_EXTENSION), hash=False
    )
    global_max_files: int = 180
    max_lines_per_file: int = 60
    max_bytes_per_file: int = 4096
    max_tree_depth: int = 10
    max_files_per_directory: int = 30
    include_tree: bool = True
    tree_summary_only: bool = True
    include_file_contents: bool = True
    strip_source_to_signatures: bool = True
    signature_mode: str = "syntax"
    reduce_content: bool = True
    only_high_signal: bool = True
    json_max_depth: int = 2
    json_max_entries: int = 30

    def __post_init__(self) -> None:
        extensions = frozenset(_normalise_extension(ext) for ext in self.allowed_extensions)
        object.__setattr__(self, "allowed_extensions", extensions)
        object.__setattr__(
            self,
            "excluded_directory_names",
            frozenset(name.lower() for name in self.excluded_directory_names),
        )
        object.__setattr__(
            self,
            "generated_file_suffixes",
            frozenset(suffix.lower() for suffix in self.generated_file_suffixes),
        )
        object.__setattr__(
            self,
            "category_by_extension",
            MappingProxyType(
                {
                    _normalise_extension(ext): _as_category(value)
                    for ext, value in self.category_by_extension.items()
                }
            ),
        )
        caps = dict(DEFAULT_CATEGORY_CAPS)
        caps.update({_as_category(key): value for key, value in self.category_caps.items()})
        object.__setattr__(self, "category_caps", MappingProxyType(caps))
        self._validate()

    def _validate(self) -> None:
        if not self.allowed_extensions:
            raise ConfigError("allowed_extensions must not be empty")
        unmapped = sorted(self.allowed_extensions - set(self.category_by_extension))
        if unmapped:
            raise ConfigError(
                f"No category configured for extensions: {', '.join(unmapped)}"
            )
        for category, cap in self.category_caps.items():
            _require_int(f"category cap '{category.value}'", cap, minimum=0)
        _require_int("global_max_files", self.global_max_files, minimum=0)
        _require_int("max_lines_per_file", self.max_lines_per_file, minimum=1)
        _require_int("max_bytes_per_file", self.max_bytes_per_file, minimum=1)
        _require_int("max_tree_depth", self.max_tree_depth, minimum=0)
        _require_int("max_files_per_directory", self.max_files_per_directory, minimum=0)
        _require_int("json_max_depth", self.json_max_depth, minimum=1)
        _require_int("json_max_entries", self.json_max_entries, minimum=1)
        if self.signature_mode not in SIGNATURE_MODES:
            raise ConfigError(
                f"signature_mode must be one of {', '.join(SIGNATURE_MODES)}, "
                f"got {self.signature_mode!r}"
            )

    @classmethod
    def full_export(cls, **overrides: Any) -> "ScanConfiguration":
        """Preset listing every in-scope file with raw content and the full tree."""
        values: Dict[str, Any] = {
            "category_caps": {category: _EXPORT_LIMIT for category in Category},
            "global_max_files": _EXPORT_LIMIT,
            "max_lines_per_file": _EXPORT_LIMIT,
            "max_bytes_per_file": 64 * 1024 * 1024,
            "max_tree_depth": 256,
            "max_files_per_directory": _EXPORT_LIMIT,
            "tree_summary_only": False,
            "strip_source_to_signatures": False,
            "reduce_content": False,
            "only_high_signal": False,
        }
        values.update(overrides)
        return cls(**values)

    def replace(self, **changes: Any) -> "ScanConfiguration":
        """Return a copy with `changes` applied (validated again)."""
        return dataclasses.replace(self, **changes)

    def category_for(self, extension: str) -> Category:
        return self.category_by_extension.get(extension.lower(), Category.CONFIG_DATA)

    def cap_for(self, category: Category) -> int:
        return self.category_caps.get(category, 0)

    def describe(self) -> List[str]:
        """Return `key=value` pairs describing the active settings."""
        return [
            f"MaxFilesTotal={self.global_max_files}",
            f"MaxLinesPerFile={self.max_lines_per_file}",
            f"MaxBytesPerFile={self.max_bytes_per_file}",
            f"MaxTreeDepth={self.max_tree_depth}",
            f"IncludeTree={self.include_tree}",
            f"TreeSummaryOnly={self.tree_summary_only}",
            f"StripSignatures={self.strip_source_to_signatures}",
            f"OnlyHighSignal={self.only_high_signal}",
        ]


def load_config(
    config_path: Path, base: Optional[ScanConfiguration] = None
) -> ScanConfiguration:
    """Load project overrides from disk on top of `base` (defaults when omitted)."""
    base = base or ScanConfiguration()
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return base

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return base.replace(**_overrides_from_mapping(data))


def _overrides_from_mapping(data: Mapping[str, Any]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    if "extensions" in data:
        overrides["allowed_extensions"] = frozenset(_as_str_list(data["extensions"], "extensions"))
    if "exclude_dirs" in data:
        overrides["excluded_directory_names"] = frozenset(
            _as_str_list(data["exclude_dirs"], "exclude_dirs")
        )
    if "generated_suffixes" in data:
        overrides["generated_file_suffixes"] = frozenset(
            _as_str_list(data["generated_suffixes"], "generated_suffixes")
        )

    categories = _as_dict(data.get("categories"), "categories")
    if categories:
        merged: Dict[str, Any] = dict(DEFAULT_CATEGORY_BY_EXTENSION)
        merged.update(categories)
        overrides["category_by_extension"] = merged

    caps = _as_dict(data.get("caps"), "caps")
    if caps:
        overrides["category_caps"] = {key: _as_int(value, f"caps.{key}") for key, value in caps.items()}

    scalar_keys = {
        "max_files": "global_max_files",
        "max_lines": "max_lines_per_file",
        "max_bytes": "max_bytes_per_file",
        "max_tree_depth": "max_tree_depth",
        "max_files_per_directory": "max_files_per_directory",
    }
    for key, attribute in scalar_keys.items():
        if key in data:
            overrides[attribute] = _as_int(data[key], key)

    if "tree" in data:
        tree_mode = str(data["tree"]).lower()
        if tree_mode not in {"summary", "full", "none"}:
            raise ConfigError("tree must be one of summary, full, none")
        overrides["include_tree"] = tree_mode != "none"
        overrides["tree_summary_only"] = tree_mode == "summary"

    if "signatures" in data:
        mode = data["signatures"]
        if mode is False or str(mode).lower() == "off":
            overrides["strip_source_to_signatures"] = False
        else:
            overrides["strip_source_to_signatures"] = True
            overrides["signature_mode"] = str(mode).lower()

    bool_keys = {
        "file_contents": "include_file_contents",
        "high_signal": "only_high_signal",
        "reduce": "reduce_content",
    }
    for key, attribute in bool_keys.items():
        if key in data:
            overrides[attribute] = _as_bool(data[key], key)

    json_data = _as_dict(data.get("json"), "json")
    if "max_depth" in json_data:
        overrides["json_max_depth"] = _as_int(json_data["max_depth"], "json.max_depth")
    if "max_entries" in json_data:
        overrides["json_max_entries"] = _as_int(json_data["max_entries"], "json.max_entries")

    return overrides


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _normalise_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if not extension:
        raise ConfigError("Extensions must not be empty")
    return extension if extension.startswith(".") else f".{extension}"


def _as_category(value: Any) -> Category:
    if isinstance(value, Category):
        return value
    try:
        return Category(str(value).lower())
    except ValueError as exc:
        valid = ", ".join(category.value for category in Category)
        raise ConfigError(f"Unknown category {value!r} (expected one of {valid})") from exc


def _require_int(name: str, value: Any, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")


def _as_dict(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping")
    return value


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise ConfigError(f"{name} must be an integer, got {value!r}")


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _as_str_list(value: Any, name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    raise ConfigError(f"{name} must be a list of strings")


def apply_overrides(
    config: ScanConfiguration,
    *,
    tree: Optional[str] = None,
    signatures: Optional[str] = None,
    max_files: Optional[int] = None,
    max_lines: Optional[int] = None,
    max_bytes: Optional[int] = None,
    high_signal: Optional[bool] = None,
) -> ScanConfiguration:
    """Apply caller overrides using the same keys and validation as the config file."""
    data: Dict[str, Any] = {
        key: value
        for key, value in (
            ("tree", tree),
            ("signatures", signatures),
            ("max_files", max_files),
            ("max_lines", max_lines),
            ("max_bytes", max_bytes),
            ("high_signal", high_signal),
        )
        if value is not None
    }
    if not data:
        return config
    return config.replace(**_overrides_from_mapping(data))


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ScanConfiguration",
    "apply_overrides",
    "load_config",
]
