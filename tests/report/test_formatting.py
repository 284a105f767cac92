"""Tests for report cell formatting."""

from __future__ import annotations

from includecost.report.formatting import UNKNOWN, count_of, format_count, format_includers
from tests._fixtures.source_builder import run_pipeline


def test_format_count_without_separator() -> None:
    assert format_count(1234567) == "1234567"
    assert format_count(0) == "0"


def test_format_count_groups_thousands() -> None:
    assert format_count(1234567, ",") == "1,234,567"
    assert format_count(999, ",") == "999"
    assert format_count(1000, " ") == "1 000"
    assert format_count(-12345, ",") == "-12,345"
    assert format_count(1234567, ".") == "1.234.567"


def test_unknown_values_render_as_unknown() -> None:
    assert format_count(None) == UNKNOWN == "unknown"
    assert count_of(None) is None
    assert count_of([1, 2]) == 2


def test_format_includers_orders_by_reach_and_hides_sources() -> None:
    result = run_pipeline(
        {
            "direct.cpp": '#include "core.h"\n',
            "s1.cpp": '#include "wide.h"\n',
            "s2.cpp": '#include "wide.h"\n',
            "s3.cpp": '#include "narrow.h"\n',
            "wide.h": '#include "core.h"\n',
            "narrow.h": '#include "core.h"\n',
            "core.h": "int core;\n",
        }
    )
    core = result.registry.get("core.h")
    assert format_includers(result.registry, core) == "wide.h narrow.h h_1"


def test_format_includers_empty_when_unused() -> None:
    result = run_pipeline({"lonely.h": "int x;\n"})
    assert format_includers(result.registry, result.registry.get("lonely.h")) == ""
