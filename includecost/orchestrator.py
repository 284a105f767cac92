"""Pipeline orchestration for analyze/check flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import IncludeCostConfig, load_config
from .engine import AnalysisResult, FileRegistry, IncludeGraphPipeline
from .logging import get_logger
from .models import SourceManifest
from .report import ReportRenderer, SortKey
from .scanner import SourceScanner
from .stores import ParseCache

_CACHE_DIRNAME = ".includecost"
_CACHE_FILENAME = "parse_cache.json"


@dataclass
class AnalysisOutcome:
    """Everything produced by one analyze run."""

    manifest: SourceManifest
    config: IncludeCostConfig
    result: AnalysisResult


class Orchestrator:
    """Coordinates scanning, the include-graph engine and reporting."""

    def __init__(self, scanner: SourceScanner | None = None) -> None:
        self.scanner = scanner or SourceScanner()
        self.logger = get_logger("orchestrator")

    def run_analyze(
        self,
        path: str,
        *,
        config_path: Path | None = None,
        use_cache: Optional[bool] = None,
        strict: Optional[bool] = None,
    ) -> AnalysisOutcome:
        """Scan ``path`` and run the full include-graph pipeline over it."""
        source_dir = Path(path).expanduser().resolve()
        self.logger.info("Analyzing %s", source_dir)
        if config_path is not None:
            config = load_config(config_path, required=True)
        else:
            config = load_config(source_dir)

        manifest = self.scanner.scan(source_dir, config)
        self.logger.debug("Scanner discovered %d files", len(manifest.files))

        registry = FileRegistry(root=manifest.root)
        for file in manifest.files:
            registry.add(file.name, file.text, is_source=file.is_source, fingerprint=file.hash)

        cache_enabled = config.cache.enabled if use_cache is None else use_cache
        cache = self._load_cache(source_dir) if cache_enabled else None
        strict_mode = config.directives.strict if strict is None else strict

        pipeline = IncludeGraphPipeline(strict=strict_mode, cache=cache)
        result = pipeline.run(registry)

        if cache is not None:
            cache.prune(file.name for file in manifest.files)
            try:
                cache.persist()
            except OSError as exc:
                self.logger.warning("Could not write parse cache: %s", exc)

        return AnalysisOutcome(manifest=manifest, config=config, result=result)

    def render(
        self,
        outcome: AnalysisOutcome,
        *,
        fmt: str | None = None,
        key: SortKey | None = None,
        descending: Optional[bool] = None,
    ) -> str:
        """Render ``outcome`` using configured defaults for anything not given."""
        report_config = outcome.config.report
        renderer = ReportRenderer(
            separator=report_config.thousands_separator,
            templates_dir=report_config.templates_dir,
        )
        return renderer.render(
            outcome.result,
            fmt or report_config.format,
            key=key or report_config.sort,
            descending=report_config.descending if descending is None else descending,
        )

    def _load_cache(self, source_dir: Path) -> ParseCache:
        cache_path = source_dir / _CACHE_DIRNAME / _CACHE_FILENAME
        self.logger.debug("Using parse cache at %s", cache_path)
        return ParseCache(cache_path)
