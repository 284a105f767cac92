"""Tests for report sort keys and grouping."""

from __future__ import annotations

import pytest

from includecost.report.sorting import (
    GROUP_HEADERS,
    GROUP_SOURCES,
    GROUP_STUBS,
    SORT_KEYS,
    SortKey,
    order_records,
    parse_sort_key,
)
from tests._fixtures.source_builder import run_pipeline

FILES = {
    "main.cpp": '#include "big.h"\n#include "small.h"\n#include <vector>\nint main() {}\n',
    "tool.cpp": '#include "small.h"\n',
    "big.h": "int a;\nint b;\nint c;\nint d;\n",
    "small.h": "int s;\n",
    "alpha.h": "int alpha;\nint beta;\n",
}


def _names(records) -> list[str]:
    return [record.name for record in records]


def test_every_sort_key_has_a_metric() -> None:
    assert set(SORT_KEYS) == set(SortKey)


def test_groups_keep_stubs_and_sources_apart() -> None:
    result = run_pipeline(FILES)
    grouped = order_records(result.registry, SortKey.NAME)
    assert _names(grouped[GROUP_HEADERS]) == ["alpha.h", "big.h", "small.h"]
    assert _names(grouped[GROUP_STUBS]) == ["vector"]
    assert _names(grouped[GROUP_SOURCES]) == ["main.cpp", "tool.cpp"]


def test_numeric_keys_default_to_descending() -> None:
    result = run_pipeline(FILES)
    grouped = order_records(result.registry, SortKey.CODE_LINES)
    assert _names(grouped[GROUP_HEADERS]) == ["big.h", "alpha.h", "small.h"]


def test_direction_can_be_overridden() -> None:
    result = run_pipeline(FILES)
    grouped = order_records(result.registry, SortKey.CODE_LINES, descending=False)
    assert _names(grouped[GROUP_HEADERS]) == ["small.h", "alpha.h", "big.h"]


def test_ties_fall_back_to_name() -> None:
    result = run_pipeline({"zeta.h": "int z;\n", "eta.h": "int e;\n", "beta.h": "int b;\n"})
    for descending in (True, False):
        grouped = order_records(result.registry, SortKey.CODE_LINES, descending=descending)
        assert _names(grouped[GROUP_HEADERS]) == ["beta.h", "eta.h", "zeta.h"]


def test_include_count_and_contribution_orderings() -> None:
    result = run_pipeline(FILES)
    grouped = order_records(result.registry, SortKey.INCLUDE_COUNT)
    assert _names(grouped[GROUP_HEADERS]) == ["small.h", "big.h", "alpha.h"]
    grouped = order_records(result.registry, SortKey.CONTRIBUTION_TOTAL)
    assert _names(grouped[GROUP_HEADERS]) == ["big.h", "small.h", "alpha.h"]


def test_unknown_metrics_sort_last() -> None:
    result = run_pipeline(
        {
            "a.h": '#include "b.h"\n',
            "b.h": '#include "a.h"\n',
        }
    )
    grouped = order_records(result.registry, SortKey.COMBINED_LINES)
    assert _names(grouped[GROUP_HEADERS]) == ["a.h", "b.h"]


@pytest.mark.parametrize(
    "value",
    ["contribution-total", "contribution_total", "by-contribution-total", "Contribution-Total"],
)
def test_parse_sort_key_accepts_spellings(value: str) -> None:
    assert parse_sort_key(value) is SortKey.CONTRIBUTION_TOTAL


def test_parse_sort_key_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown sort key"):
        parse_sort_key("by-color")
