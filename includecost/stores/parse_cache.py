"""Persistent cache for lexer results."""

from __future__ import annotations

from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..engine.lexer import LexResult
from ..models import IncludeDirective

_CACHE_VERSION = 2


class ParseCache:
    """Stores lexer results keyed by file name, content fingerprint and lexer signature."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    def get(self, name: str, *, signature: str, fingerprint: str) -> Optional[LexResult]:
        entry = self._entries.get(name)
        if not entry:
            return None
        if entry.get("signature") != signature:
            return None
        if entry.get("fingerprint") != fingerprint:
            return None
        return _result_from_dict(entry.get("result"))

    def store(
        self,
        name: str,
        *,
        signature: str,
        fingerprint: str,
        result: LexResult,
    ) -> None:
        self._entries[name] = {
            "signature": signature,
            "fingerprint": fingerprint,
            "result": _result_to_dict(result),
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._dirty = True

    def prune(self, names_to_keep: Iterable[str]) -> None:
        keep = set(names_to_keep)
        removed = [name for name in self._entries if name not in keep]
        if removed:
            for name in removed:
                self._entries.pop(name, None)
            self._dirty = True

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {
            "version": _CACHE_VERSION,
            "entries": self._entries,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
        self._dirty = False

    def clear(self) -> None:
        self._entries.clear()
        self._dirty = True

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        valid_entries: Dict[str, Dict[str, object]] = {}
        for name, raw in entries.items():
            if not isinstance(name, str) or not isinstance(raw, dict):
                continue
            if "signature" not in raw or "fingerprint" not in raw or "result" not in raw:
                continue
            valid_entries[name] = raw
        self._entries = valid_entries
        self._dirty = False


def _result_to_dict(result: LexResult) -> Dict[str, object]:
    return {
        "code_lines": result.code_lines,
        "includes": [
            {"name": directive.name, "system": directive.system}
            for directive in result.includes
        ],
        "unsupported": list(result.unsupported),
    }


def _result_from_dict(payload: object) -> Optional[LexResult]:
    if not isinstance(payload, dict):
        return None
    code_lines = payload.get("code_lines")
    raw_includes = payload.get("includes")
    unsupported = payload.get("unsupported")
    if not isinstance(code_lines, int) or not isinstance(raw_includes, list):
        return None
    if not isinstance(unsupported, list):
        return None
    if not all(isinstance(line, int) for line in unsupported):
        return None
    includes: List[IncludeDirective] = []
    for raw in raw_includes:
        if not isinstance(raw, dict):
            return None
        name = raw.get("name")
        system = raw.get("system")
        if not isinstance(name, str) or not isinstance(system, bool):
            return None
        includes.append(IncludeDirective(name=name, system=system))
    return LexResult(includes=includes, code_lines=code_lines, unsupported=list(unsupported))


__all__ = ["ParseCache"]
