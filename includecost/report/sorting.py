"""Sort keys for include reports, kept as an enum-to-metric table."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from ..engine.registry import FileRegistry
from ..models import FileRecord


class SortKey(str, Enum):
    """Orderings a report can request."""

    NAME = "name"
    SIZE = "size"
    INCLUDE_COUNT = "include-count"
    CODE_LINES = "code-lines"
    TEXT_LINES = "text-lines"
    COMBINED_LINES = "combined-lines"
    CONTRIBUTION_SELF = "contribution-self"
    CONTRIBUTION_TOTAL = "contribution-total"

    @property
    def default_descending(self) -> bool:
        return self is not SortKey.NAME


Metric = Callable[[FileRecord], object]

SORT_KEYS: Dict[SortKey, Metric] = {
    SortKey.NAME: lambda record: record.name,
    SortKey.SIZE: lambda record: record.size,
    SortKey.INCLUDE_COUNT: lambda record: len(record.included_by),
    SortKey.CODE_LINES: lambda record: record.code_lines,
    SortKey.TEXT_LINES: lambda record: record.text_lines,
    SortKey.COMBINED_LINES: lambda record: record.combined_lines,
    SortKey.CONTRIBUTION_SELF: lambda record: record.contribution_self,
    SortKey.CONTRIBUTION_TOTAL: lambda record: record.contribution_total,
}

# Report groups, in the order they are listed.
GROUP_HEADERS = "headers"
GROUP_STUBS = "stubs"
GROUP_SOURCES = "sources"
GROUPS: Tuple[str, ...] = (GROUP_HEADERS, GROUP_STUBS, GROUP_SOURCES)


def parse_sort_key(value: str) -> SortKey:
    """Accept ``contribution-total``, ``contribution_total`` or ``by-contribution-total``."""
    normalised = value.strip().lower().replace("_", "-")
    if normalised.startswith("by-"):
        normalised = normalised[3:]
    try:
        return SortKey(normalised)
    except ValueError:
        choices = ", ".join(key.value for key in SortKey)
        raise ValueError(f"Unknown sort key '{value}' (expected one of: {choices})") from None


def group_of(record: FileRecord) -> str:
    if record.is_source:
        return GROUP_SOURCES
    if record.is_stub:
        return GROUP_STUBS
    return GROUP_HEADERS


def order_records(
    registry: FileRegistry,
    key: SortKey,
    descending: Optional[bool] = None,
) -> Dict[str, List[FileRecord]]:
    """Split records into headers, stubs and sources, each sorted by ``key``.

    Ties fall back to the file name. Records whose metric is unknown are listed
    after every known value regardless of direction.
    """
    if descending is None:
        descending = key.default_descending
    metric = SORT_KEYS[key]

    grouped: Dict[str, List[FileRecord]] = {group: [] for group in GROUPS}
    for record in registry:
        grouped[group_of(record)].append(record)

    for group, records in grouped.items():
        # Two stable passes: name first, then the metric.
        records.sort(key=lambda record: record.name)
        known = [record for record in records if metric(record) is not None]
        unknown = [record for record in records if metric(record) is None]
        known.sort(key=metric, reverse=descending)  # type: ignore[arg-type]
        grouped[group] = known + unknown
    return grouped


__all__ = [
    "GROUPS",
    "GROUP_HEADERS",
    "GROUP_SOURCES",
    "GROUP_STUBS",
    "SORT_KEYS",
    "SortKey",
    "group_of",
    "order_records",
    "parse_sort_key",
]
