"""Core data models shared across includecost components."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class IncludeDirective:
    """A single ``#include`` directive as it appears in the text."""

    name: str
    system: bool


@dataclass
class FileRecord:
    """One physical file or synthesized stub inside the registry arena.

    Edges are stored as indices into the owning registry, never as references to
    other records. Closure and cost fields stay ``None`` until the corresponding
    pipeline stage has run.
    """

    name: str
    raw_text: str = ""
    is_stub: bool = False
    is_source: bool = False
    text_lines: int = 0
    code_lines: int = 0
    parsed_includes: List[IncludeDirective] = field(default_factory=list)

    includes: List[int] = field(default_factory=list)
    included_by: List[int] = field(default_factory=list)

    includes_indirect: Optional[List[int]] = None
    included_by_indirect: Optional[List[int]] = None
    included_by_indirect_sources: Optional[List[int]] = None

    combined_lines: Optional[int] = None
    contribution_self: Optional[int] = None
    contribution_total: Optional[int] = None

    @property
    def size(self) -> int:
        return len(self.raw_text.encode("utf-8"))

    @property
    def is_header(self) -> bool:
        """True for real, non-source files."""
        return not self.is_source and not self.is_stub

    @property
    def display_name(self) -> str:
        return f"<{self.name}>" if self.is_stub else self.name


@dataclass(frozen=True)
class CycleWitness:
    """Representative include pair left over after peeling an acyclic prefix.

    ``includer`` still includes ``node`` once every removable file has been
    peeled away, so both take part in (or hang off) a cycle.
    """

    node: int
    includer: int


@dataclass
class SourceFile:
    """A file picked up by the scanner, ready to be registered."""

    name: str
    size: int
    hash: str
    is_source: bool
    text: str


@dataclass
class SourceManifest:
    """Normalized view of the analyzed directory."""

    root: str
    files: List[SourceFile]
