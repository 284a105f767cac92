"""Include-graph resolution engine."""

from __future__ import annotations

from .closure import compute_closures
from .costs import compute_costs
from .cycles import find_cycle
from .lexer import DirectiveError, LexResult, count_text_lines, lex
from .pipeline import AnalysisResult, IncludeGraphPipeline
from .registry import DuplicateFileError, FileRegistry

__all__ = [
    "AnalysisResult",
    "DirectiveError",
    "DuplicateFileError",
    "FileRegistry",
    "IncludeGraphPipeline",
    "LexResult",
    "compute_closures",
    "compute_costs",
    "count_text_lines",
    "find_cycle",
    "lex",
]
