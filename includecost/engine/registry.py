"""File registry: the arena that owns every file record."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set

from ..logging import get_logger
from ..models import FileRecord
from .lexer import count_text_lines, lex, lexer_signature, unsupported_directive_message

if TYPE_CHECKING:  # pragma: no cover
    from ..stores import ParseCache

logger = get_logger("engine.registry")


class DuplicateFileError(ValueError):
    """Raised when two records would share the same name."""


class FileRegistry:
    """Owns all file records and indexes them by unique name.

    Records refer to each other only through their index in :attr:`records`;
    the registry is the single owner of the graph.
    """

    def __init__(self, root: str | None = None) -> None:
        self.root = root
        self.records: List[FileRecord] = []
        self._index: Dict[str, int] = {}
        self._fingerprints: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.records)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __getitem__(self, index: int) -> FileRecord:
        return self.records[index]

    def add(
        self,
        name: str,
        text: str,
        *,
        is_source: bool,
        fingerprint: str | None = None,
    ) -> int:
        """Register a real file and return its index."""
        if name in self._index:
            raise DuplicateFileError(f"File already registered: {name}")
        record = FileRecord(name=name, raw_text=text, is_source=is_source)
        record.text_lines = count_text_lines(text)
        index = self._append(record)
        if fingerprint is not None:
            self._fingerprints[name] = fingerprint
        return index

    def index_of(self, name: str) -> int:
        """Return the index of ``name``; ``KeyError`` when it is not registered."""
        return self._index[name]

    def get(self, name: str) -> Optional[FileRecord]:
        index = self._index.get(name)
        return None if index is None else self.records[index]

    def names(self, indices: List[int]) -> List[str]:
        return [self.records[index].name for index in indices]

    def parse(self, *, strict: bool = False, cache: "ParseCache | None" = None) -> None:
        """Lex every real record, filling directives and line counts."""
        signature = lexer_signature(strict=strict)
        hits = 0
        for record in self.records:
            if record.is_stub:
                continue
            fingerprint = self._fingerprint(record) if cache is not None else ""
            result = None
            if cache is not None:
                result = cache.get(record.name, signature=signature, fingerprint=fingerprint)
            if result is None:
                result = lex(record.raw_text, strict=strict, source_name=record.name)
                if cache is not None:
                    cache.store(
                        record.name,
                        signature=signature,
                        fingerprint=fingerprint,
                        result=result,
                    )
            else:
                hits += 1
            for line in result.unsupported:
                logger.warning(
                    "%s, skipping line", unsupported_directive_message(record.name, line)
                )
            record.parsed_includes = list(result.includes)
            record.code_lines = result.code_lines
        if cache is not None:
            logger.debug("Parse cache hits: %d of %d files", hits, self._real_count())

    def referenced_names(self) -> List[str]:
        """Every distinct include target mentioned by any record, sorted."""
        names = {
            directive.name
            for record in self.records
            for directive in record.parsed_includes
        }
        return sorted(names)

    def synthesize_stubs(self) -> List[str]:
        """Create a stub record for each referenced name that has no record yet."""
        created: List[str] = []
        for name in self.referenced_names():
            if name in self._index:
                continue
            self._append(FileRecord(name=name, is_stub=True))
            created.append(name)
        return created

    def link(self) -> None:
        """Resolve parsed directives into deduplicated forward/backward edges."""
        for record in self.records:
            record.includes = []
            record.included_by = []
        for index, record in enumerate(self.records):
            seen: Set[int] = set()
            for directive in record.parsed_includes:
                target = self._index[directive.name]
                if target in seen:
                    continue
                seen.add(target)
                record.includes.append(target)
                self.records[target].included_by.append(index)

    # ------------------------------------------------------------------
    # Internal helpers

    def _append(self, record: FileRecord) -> int:
        index = len(self.records)
        self.records.append(record)
        self._index[record.name] = index
        return index

    def _fingerprint(self, record: FileRecord) -> str:
        fingerprint = self._fingerprints.get(record.name)
        if fingerprint is None:
            fingerprint = hashlib.sha256(record.raw_text.encode("utf-8")).hexdigest()
            self._fingerprints[record.name] = fingerprint
        return fingerprint

    def _real_count(self) -> int:
        return sum(1 for record in self.records if not record.is_stub)


__all__ = ["DuplicateFileError", "FileRegistry"]
