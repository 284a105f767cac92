"""Value formatting for report cells."""

from __future__ import annotations

from typing import List, Optional

from ..engine.registry import FileRegistry
from ..models import FileRecord

UNKNOWN = "unknown"


def format_count(value: Optional[int], separator: str = "") -> str:
    """Group digits in threes with ``separator``; ``None`` renders as unknown."""
    if value is None:
        return UNKNOWN
    return f"{value:,}".replace(",", separator)


def count_of(values: Optional[List[int]]) -> Optional[int]:
    return None if values is None else len(values)


def heaviest_includers(registry: FileRegistry, record: FileRecord) -> List[FileRecord]:
    """Direct includers that are not sources, most widely included first."""
    includers = [registry[index] for index in record.included_by]
    headers = [includer for includer in includers if not includer.is_source]
    headers.sort(key=lambda includer: (-len(includer.included_by_indirect or []), includer.name))
    return headers


def format_includers(registry: FileRegistry, record: FileRecord) -> str:
    """List non-source direct includers and summarize hidden sources as ``h_N``."""
    headers = heaviest_includers(registry, record)
    parts = [includer.display_name for includer in headers]
    hidden = len(record.included_by) - len(headers)
    if hidden > 0:
        parts.append(f"h_{hidden}")
    return " ".join(parts)


__all__ = [
    "UNKNOWN",
    "count_of",
    "format_count",
    "format_includers",
    "heaviest_includers",
]
