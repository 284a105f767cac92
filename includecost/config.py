"""Configuration loading for includecost (.includecost.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .report.sorting import SortKey, parse_sort_key

CONFIG_FILENAME = ".includecost.yml"

REPORT_FORMATS = ("tsv", "markdown", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ExtensionConfig:
    """File suffixes that mark translation units and headers."""

    sources: List[str] = field(default_factory=lambda: [".cpp"])
    headers: List[str] = field(default_factory=lambda: [".h"])


@dataclass
class ReportConfig:
    """Report ordering and presentation."""

    sort: SortKey = SortKey.CONTRIBUTION_TOTAL
    descending: Optional[bool] = None
    format: str = "tsv"
    thousands_separator: str = ""
    templates_dir: Optional[Path] = None


@dataclass
class DirectiveConfig:
    """How the lexer treats include directives it cannot read."""

    strict: bool = False


@dataclass
class CacheConfig:
    """Parse cache settings."""

    enabled: bool = True


@dataclass
class IncludeCostConfig:
    """Represents the settings defined in .includecost.yml."""

    root: Path
    extensions: ExtensionConfig = field(default_factory=ExtensionConfig)
    exclude: List[str] = field(default_factory=list)
    report: ReportConfig = field(default_factory=ReportConfig)
    directives: DirectiveConfig = field(default_factory=DirectiveConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


def load_config(config_path: Path, *, required: bool = False) -> IncludeCostConfig:
    """Load configuration from disk, falling back to defaults when absent.

    With ``required`` set, a missing config file raises :class:`ConfigError`
    instead; the CLI uses this for an explicit ``--config`` path.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        if required:
            raise ConfigError(f"Config file not found: {config_file}")
        return IncludeCostConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    extensions = ExtensionConfig()
    extension_data = _as_dict(data.get("extensions"))
    if extension_data:
        sources = _as_suffix_list(extension_data.get("sources"))
        headers = _as_suffix_list(extension_data.get("headers"))
        if sources:
            extensions.sources = sources
        if headers:
            extensions.headers = headers
    overlap = set(extensions.sources) & set(extensions.headers)
    if overlap:
        joined = ", ".join(sorted(overlap))
        raise ConfigError(f"Extensions listed as both sources and headers: {joined}")

    report = ReportConfig()
    report_data = _as_dict(data.get("report"))
    if report_data:
        sort = _as_str(report_data.get("sort"))
        if sort:
            try:
                report.sort = parse_sort_key(sort)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
        report.descending = _as_bool(report_data.get("descending"))
        fmt = _as_str(report_data.get("format"))
        if fmt:
            fmt = fmt.lower()
            if fmt not in REPORT_FORMATS:
                raise ConfigError(
                    f"Unknown report format '{fmt}' (expected one of: {', '.join(REPORT_FORMATS)})"
                )
            report.format = fmt
        separator = report_data.get("thousands_separator")
        if isinstance(separator, str):
            report.thousands_separator = separator
        templates_dir = _as_str(report_data.get("templates_dir"))
        if templates_dir:
            report.templates_dir = root / templates_dir

    directives = DirectiveConfig()
    directive_data = _as_dict(data.get("directives"))
    if directive_data:
        directives.strict = _as_bool(directive_data.get("strict")) or False

    cache = CacheConfig()
    cache_data = _as_dict(data.get("cache"))
    if cache_data:
        enabled = _as_bool(cache_data.get("enabled"))
        if enabled is not None:
            cache.enabled = enabled

    return IncludeCostConfig(
        root=root,
        extensions=extensions,
        exclude=_as_str_list(data.get("exclude")),
        report=report,
        directives=directives,
        cache=cache,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
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
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_suffix_list(value: Any) -> List[str]:
    suffixes: List[str] = []
    for item in _as_str_list(value):
        item = item.strip()
        if not item:
            continue
        suffix = item if item.startswith(".") else f".{item}"
        if suffix not in suffixes:
            suffixes.append(suffix)
    return suffixes
