"""Transitive closure of the include relation in both directions."""

from __future__ import annotations

from typing import Callable, List

from ..models import FileRecord
from .registry import FileRegistry


def compute_closures(registry: FileRegistry) -> None:
    """Fill the indirect include sets of every record.

    The graph must already be known to be acyclic.
    """
    for index, record in enumerate(registry.records):
        record.includes_indirect = _reachable(registry, index, lambda r: r.includes)
        record.included_by_indirect = _reachable(registry, index, lambda r: r.included_by)
        record.included_by_indirect_sources = [
            other for other in record.included_by_indirect if registry[other].is_source
        ]


def _reachable(
    registry: FileRegistry, start: int, edges: Callable[[FileRecord], List[int]]
) -> List[int]:
    visited = {start}
    found: List[int] = []
    stack = list(reversed(edges(registry[start])))
    while stack:
        index = stack.pop()
        if index in visited:
            continue
        visited.add(index)
        found.append(index)
        stack.extend(reversed(edges(registry[index])))
    return found


__all__ = ["compute_closures"]
