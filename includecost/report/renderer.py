"""Render analysis results as TSV, Markdown or JSON reports."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader

from ..engine.pipeline import AnalysisResult
from ..engine.registry import FileRegistry
from ..models import FileRecord
from .formatting import count_of, format_count, format_includers, heaviest_includers
from .sorting import GROUP_HEADERS, GROUP_SOURCES, GROUP_STUBS, GROUPS, SortKey, order_records

COLUMNS: Tuple[str, ...] = (
    "File",
    "File size",
    "Text lines",
    "Code lines",
    "Includes (direct)",
    "Includes (total)",
    "Included by (direct)",
    "Included by sources (total)",
    "Code lines with all includes",
    "Contributes to compile (self)",
    "Contributes to compile (total)",
    "Most commonly included direct includers",
)

GROUP_TITLES: Dict[str, str] = {
    GROUP_HEADERS: "Project headers",
    GROUP_STUBS: "Other headers",
    GROUP_SOURCES: "Source files",
}


@dataclass
class ReportSummary:
    """Totals printed below the per-file table."""

    sources: int
    headers: int
    stubs: int
    code_lines: int
    compiled_lines: Optional[int]
    cycle: Optional[str]


def summarize(result: AnalysisResult) -> ReportSummary:
    records = result.registry.records
    sources = [record for record in records if record.is_source]
    compiled: Optional[int] = None
    if result.ok:
        compiled = sum(record.combined_lines or 0 for record in sources)
    return ReportSummary(
        sources=len(sources),
        headers=sum(1 for record in records if record.is_header),
        stubs=sum(1 for record in records if record.is_stub),
        code_lines=sum(record.code_lines for record in records),
        compiled_lines=compiled,
        cycle=result.describe_cycle(),
    )


class ReportRenderer:
    """Turns an :class:`AnalysisResult` into a printable report."""

    def __init__(self, *, separator: str = "", templates_dir: Path | None = None) -> None:
        self.separator = separator
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(
        self,
        result: AnalysisResult,
        fmt: str = "tsv",
        *,
        key: SortKey = SortKey.CONTRIBUTION_TOTAL,
        descending: Optional[bool] = None,
    ) -> str:
        groups = order_records(result.registry, key, descending)
        summary = summarize(result)
        if fmt == "tsv":
            return self._render_tsv(result, groups, summary)
        if fmt == "markdown":
            return self._render_markdown(result, groups, summary, key)
        if fmt == "json":
            return self._render_json(result, groups, summary, key)
        raise ValueError(f"Unknown report format: {fmt}")

    # ------------------------------------------------------------------
    # Formats

    def _render_tsv(
        self,
        result: AnalysisResult,
        groups: Dict[str, List[FileRecord]],
        summary: ReportSummary,
    ) -> str:
        lines: List[str] = ["\t".join(COLUMNS)]
        for group in GROUPS:
            for record in groups[group]:
                lines.append("\t".join(self._cells(result, record)))
            lines.append("")
        lines.append("")
        lines.extend(self._summary_lines(summary))
        return "\n".join(lines) + "\n"

    def _render_markdown(
        self,
        result: AnalysisResult,
        groups: Dict[str, List[FileRecord]],
        summary: ReportSummary,
        key: SortKey,
    ) -> str:
        template = self._env.get_template("report.md.j2")
        sections = [
            {
                "title": GROUP_TITLES[group],
                "rows": [self._cells(result, record) for record in groups[group]],
            }
            for group in GROUPS
            if groups[group]
        ]
        return (
            template.render(
                root_name=Path(result.registry.root).name if result.registry.root else "",
                sort_key=key.value,
                columns=COLUMNS,
                sections=sections,
                summary=summary,
                summary_lines=self._summary_lines(summary),
            ).strip()
            + "\n"
        )

    def _render_json(
        self,
        result: AnalysisResult,
        groups: Dict[str, List[FileRecord]],
        summary: ReportSummary,
        key: SortKey,
    ) -> str:
        registry = result.registry
        files: List[Dict[str, object]] = []
        for group in GROUPS:
            for record in groups[group]:
                files.append(
                    {
                        "name": record.name,
                        "group": group,
                        "stub": record.is_stub,
                        "source": record.is_source,
                        "size": record.size,
                        "text_lines": record.text_lines,
                        "code_lines": record.code_lines,
                        "includes": registry.names(record.includes),
                        "included_by": registry.names(record.included_by),
                        "includes_indirect": _names_or_none(registry, record.includes_indirect),
                        "included_by_indirect": _names_or_none(
                            registry, record.included_by_indirect
                        ),
                        "included_by_indirect_sources": _names_or_none(
                            registry, record.included_by_indirect_sources
                        ),
                        "combined_lines": record.combined_lines,
                        "contribution_self": record.contribution_self,
                        "contribution_total": record.contribution_total,
                        "heaviest_includers": [
                            includer.name for includer in heaviest_includers(registry, record)
                        ],
                    }
                )
        payload = {
            "sort": key.value,
            "ok": result.ok,
            "files": files,
            "summary": asdict(summary),
        }
        return json.dumps(payload, indent=2) + "\n"

    # ------------------------------------------------------------------
    # Internal helpers

    def _cells(self, result: AnalysisResult, record: FileRecord) -> List[str]:
        fmt = self._fmt
        return [
            record.display_name,
            fmt(record.size),
            fmt(record.text_lines),
            fmt(record.code_lines),
            fmt(len(record.includes)),
            fmt(count_of(record.includes_indirect)),
            fmt(len(record.included_by)),
            fmt(count_of(record.included_by_indirect_sources)),
            fmt(record.combined_lines),
            fmt(record.contribution_self),
            fmt(record.contribution_total),
            format_includers(result.registry, record),
        ]

    def _summary_lines(self, summary: ReportSummary) -> List[str]:
        lines = [
            f"Total files: {summary.sources} sources, {summary.headers} includes, "
            f"{summary.stubs} other includes",
            f"Total code lines: {self._fmt(summary.code_lines)}",
            f"Total compiled code lines: {self._fmt(summary.compiled_lines)}",
        ]
        if summary.cycle is not None:
            lines.append(f"Circular dependency detected: {summary.cycle}")
        return lines

    def _fmt(self, value: Optional[int]) -> str:
        return format_count(value, self.separator)

    def _create_env(self, templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["md_cell"] = _markdown_cell
        return env


def _names_or_none(registry: FileRegistry, indices: Optional[List[int]]) -> Optional[List[str]]:
    return None if indices is None else registry.names(indices)


def _markdown_cell(value: object) -> str:
    text = str(value)
    return text.replace("|", "\\|").replace("<", "&lt;").replace(">", "&gt;")


__all__ = ["COLUMNS", "ReportRenderer", "ReportSummary", "summarize"]
