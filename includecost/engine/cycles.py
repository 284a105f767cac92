"""Circular include detection by repeated peeling of unreferenced files."""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from ..models import CycleWitness
from .registry import FileRegistry


def find_cycle(registry: FileRegistry) -> Optional[CycleWitness]:
    """Return ``None`` when the include graph is acyclic, else a witness pair.

    Each pass removes every pending file that no remaining file includes. The
    loop stops when the pending set is empty or a pass removes nothing; what is
    left then sits on or below a cycle.
    """
    remaining: Dict[int, Set[int]] = {
        index: set(record.included_by) for index, record in enumerate(registry.records)
    }
    pending: List[int] = list(range(len(registry)))

    while pending:
        peeled = [index for index in pending if not remaining[index]]
        if not peeled:
            break
        for index in peeled:
            for target in registry[index].includes:
                remaining[target].discard(index)
        peeled_set = set(peeled)
        pending = [index for index in pending if index not in peeled_set]

    if not pending:
        return None

    node = pending[0]
    includer = next(
        index for index in registry[node].included_by if index in remaining[node]
    )
    return CycleWitness(node=node, includer=includer)


__all__ = ["find_cycle"]
