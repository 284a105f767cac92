"""Compile cost aggregation over the include closures."""

from __future__ import annotations

from .registry import FileRegistry


def compute_costs(registry: FileRegistry) -> None:
    """Fill combined line counts and compile contributions for every record.

    A source file is compiled once, so it contributes its own lines. A header
    is weighted by the number of distinct sources that pull it in.
    """
    for record in registry.records:
        if record.includes_indirect is None or record.included_by_indirect_sources is None:
            raise ValueError(f"Closures have not been computed for {record.name}")

        included = sum(registry[index].code_lines for index in record.includes_indirect)
        record.combined_lines = record.code_lines + included

        if record.is_source:
            record.contribution_self = record.code_lines
            record.contribution_total = record.combined_lines
        else:
            weight = len(record.included_by_indirect_sources)
            record.contribution_self = record.code_lines * weight
            record.contribution_total = record.combined_lines * weight


__all__ = ["compute_costs"]
