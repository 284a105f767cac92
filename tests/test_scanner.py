"""Tests for includecost.scanner."""

from __future__ import annotations

from hashlib import sha256
from pathlib import Path

import pytest

from includecost.config import ExtensionConfig, IncludeCostConfig, load_config
from includecost.scanner import ScanError, SourceScanner
from tests._fixtures.source_builder import SourceTreeBuilder


def test_scan_keeps_sources_and_headers_only(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "main.cpp": "int main() {}\n",
            "util.h": "int util();\n",
            "notes.txt": "ignore me\n",
            "build.hpp": "int build();\n",
            "nested/inner.h": "int inner();\n",
        }
    )
    root = source_tree.path()

    manifest = SourceScanner().scan(root, load_config(root))
    files = {file.name: file for file in manifest.files}

    assert manifest.root == str(root.resolve())
    assert list(files) == ["main.cpp", "util.h"]
    assert files["main.cpp"].is_source is True
    assert files["util.h"].is_source is False
    assert files["util.h"].text == "int util();\n"
    assert files["util.h"].size == len("int util();\n")
    assert files["util.h"].hash == sha256((root / "util.h").read_bytes()).hexdigest()


def test_scan_honours_configured_extensions_and_excludes(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "main.cc": "int main() {}\n",
            "api.hpp": "int api();\n",
            "api_generated.hpp": "int generated();\n",
            "old.cpp": "int old();\n",
        }
    )
    root = source_tree.path()
    config = IncludeCostConfig(
        root=root,
        extensions=ExtensionConfig(sources=[".cc"], headers=[".hpp"]),
        exclude=["*_generated.*"],
    )

    manifest = SourceScanner().scan(root, config)
    assert [(file.name, file.is_source) for file in manifest.files] == [
        ("api.hpp", False),
        ("main.cc", True),
    ]


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="missing"):
        SourceScanner().scan(missing, IncludeCostConfig(root=tmp_path))


def test_scan_rejects_file_path(tmp_path: Path) -> None:
    target = tmp_path / "main.cpp"
    target.write_text("int main() {}\n", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        SourceScanner().scan(target, IncludeCostConfig(root=tmp_path))


def test_scan_reports_undecodable_file(source_tree: SourceTreeBuilder) -> None:
    root = source_tree.path()
    (root / "bad.h").write_bytes(b"\xff\xfe\xfa not utf-8")
    with pytest.raises(ScanError, match="bad.h"):
        SourceScanner().scan(root, IncludeCostConfig(root=root))
