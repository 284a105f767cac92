"""Sequential include-graph pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..logging import get_logger
from ..models import CycleWitness
from .closure import compute_closures
from .costs import compute_costs
from .cycles import find_cycle
from .registry import FileRegistry

if TYPE_CHECKING:  # pragma: no cover
    from ..stores import ParseCache


@dataclass
class AnalysisResult:
    """Outcome of a pipeline run over one registry."""

    registry: FileRegistry
    cycle: Optional[CycleWitness] = None

    @property
    def ok(self) -> bool:
        return self.cycle is None

    def describe_cycle(self) -> str | None:
        if self.cycle is None:
            return None
        node = self.registry[self.cycle.node]
        includer = self.registry[self.cycle.includer]
        return f"{node.display_name} <-> {includer.display_name}"


class IncludeGraphPipeline:
    """Runs lexing, stub synthesis, linking, cycle check, closure and costs in order."""

    def __init__(self, *, strict: bool = False, cache: "ParseCache | None" = None) -> None:
        self.strict = strict
        self.cache = cache
        self.logger = get_logger("engine.pipeline")

    def run(self, registry: FileRegistry) -> AnalysisResult:
        self.logger.info("Parsing %d files...", len(registry))
        registry.parse(strict=self.strict, cache=self.cache)

        self.logger.info("Generating stubs for missing includes...")
        stubs = registry.synthesize_stubs()
        if stubs:
            self.logger.debug("Synthesized %d stubs: %s", len(stubs), ", ".join(stubs))

        self.logger.info("Resolving include relations...")
        registry.link()

        self.logger.info("Checking circular dependencies...")
        cycle = find_cycle(registry)
        if cycle is not None:
            result = AnalysisResult(registry=registry, cycle=cycle)
            self.logger.error("Circular dependency detected: %s", result.describe_cycle())
            return result

        self.logger.info("Resolving indirect includes...")
        compute_closures(registry)

        self.logger.info("Calculating include costs...")
        compute_costs(registry)
        return AnalysisResult(registry=registry)


__all__ = ["AnalysisResult", "IncludeGraphPipeline"]
