"""Tests for includecost.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from includecost.config import ConfigError, IncludeCostConfig, load_config
from includecost.report import SortKey


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, IncludeCostConfig)
    assert config.root == tmp_path.resolve()
    assert config.extensions.sources == [".cpp"]
    assert config.extensions.headers == [".h"]
    assert config.exclude == []
    assert config.report.sort is SortKey.CONTRIBUTION_TOTAL
    assert config.report.descending is None
    assert config.report.format == "tsv"
    assert config.report.thousands_separator == ""
    assert config.report.templates_dir is None
    assert config.directives.strict is False
    assert config.cache.enabled is True


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".includecost.yml"
    config_file.write_text(
        """
extensions:
  sources: [".cpp", "cc"]
  headers:
    - ".h"
    - ".hpp"
exclude:
  - "*_generated.h"
report:
  sort: by-combined-lines
  descending: "no"
  format: markdown
  thousands_separator: ","
  templates_dir: "report-templates"
directives:
  strict: true
cache:
  enabled: false
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.extensions.sources == [".cpp", ".cc"]
    assert config.extensions.headers == [".h", ".hpp"]
    assert config.exclude == ["*_generated.h"]
    assert config.report.sort is SortKey.COMBINED_LINES
    assert config.report.descending is False
    assert config.report.format == "markdown"
    assert config.report.thousands_separator == ","
    assert config.report.templates_dir == tmp_path / "report-templates"
    assert config.directives.strict is True
    assert config.cache.enabled is False


def test_load_config_from_directory_finds_file(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text("exclude: legacy.h\n", encoding="utf-8")
    assert load_config(tmp_path).exclude == ["legacy.h"]


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).report.format == "tsv"


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text("report: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_load_config_rejects_unknown_sort_key(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text("report:\n  sort: color\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Unknown sort key"):
        load_config(tmp_path)


def test_load_config_rejects_unknown_format(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text("report:\n  format: html\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Unknown report format"):
        load_config(tmp_path)


def test_load_config_rejects_overlapping_extensions(tmp_path: Path) -> None:
    (tmp_path / ".includecost.yml").write_text(
        "extensions:\n  sources: [.h]\n  headers: [.h]\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError, match="both sources and headers"):
        load_config(tmp_path)


def test_load_config_requires_explicit_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path / "missing.yml", required=True)
