"""Directory scanning for C/C++ sources and headers."""

from __future__ import annotations

import hashlib
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import IncludeCostConfig
from .logging import get_logger
from .models import SourceFile, SourceManifest

logger = get_logger("scanner")


class ScanError(RuntimeError):
    """Raised when a matching file cannot be read or decoded."""


def _is_excluded(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def _classify(name: str, config: IncludeCostConfig) -> bool | None:
    """Return True for sources, False for headers, None for anything else."""
    if name.endswith(tuple(config.extensions.sources)):
        return True
    if name.endswith(tuple(config.extensions.headers)):
        return False
    return None


def _iter_candidates(root: Path) -> Iterator[Path]:
    for path in sorted(root.iterdir(), key=lambda item: item.name):
        if path.is_file():
            yield path


class SourceScanner:
    """Lists one directory and loads every recognized source or header file."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def scan(self, root: str | Path, config: IncludeCostConfig) -> SourceManifest:
        """Return a manifest of the files the engine treats as real."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Source directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")

        files: List[SourceFile] = []
        skipped = 0
        for path in _iter_candidates(root_path):
            is_source = _classify(path.name, config)
            if is_source is None or _is_excluded(path.name, config.exclude):
                skipped += 1
                continue
            try:
                payload = path.read_bytes()
            except OSError as exc:
                raise ScanError(f"Failed to read {path.name}: {exc}") from exc
            try:
                text = payload.decode(self.encoding)
            except UnicodeDecodeError as exc:
                raise ScanError(f"Failed to decode {path.name} as {self.encoding}: {exc}") from exc

            files.append(
                SourceFile(
                    name=path.name,
                    size=len(payload),
                    hash=hashlib.sha256(payload).hexdigest(),
                    is_source=is_source,
                    text=text,
                )
            )

        logger.debug("Scanner kept %d files, skipped %d", len(files), skipped)
        return SourceManifest(root=str(root_path), files=files)


__all__ = ["ScanError", "SourceScanner"]
