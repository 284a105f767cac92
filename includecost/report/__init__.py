"""Report ordering, formatting and rendering."""

from __future__ import annotations

from .formatting import UNKNOWN, format_count, format_includers
from .renderer import COLUMNS, ReportRenderer, ReportSummary, summarize
from .sorting import SORT_KEYS, SortKey, order_records, parse_sort_key

__all__ = [
    "COLUMNS",
    "SORT_KEYS",
    "UNKNOWN",
    "ReportRenderer",
    "ReportSummary",
    "SortKey",
    "format_count",
    "format_includers",
    "order_records",
    "parse_sort_key",
    "summarize",
]
