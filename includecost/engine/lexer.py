"""Minimal directive-aware lexer for C/C++ text.

The lexer is deliberately not a preprocessor. It skips blanks and comments,
counts the physical lines that carry code, and records ``#include`` directives
in the order they appear. Everything else about a code line is ignored.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import IncludeDirective

_KEYWORD = "include"

# Bump when lexing rules change so cached results are invalidated.
LEXER_VERSION = 2

# opening delimiter -> (closing delimiter, system style)
_DELIMITERS = {
    "<": (">", True),
    '"': ('"', False),
}


class DirectiveError(ValueError):
    """Raised in strict mode when an include directive has an unsupported shape."""


class _UnsupportedDirective(Exception):
    pass


@dataclass
class LexResult:
    """Ordered directives plus the number of code lines in a text.

    ``unsupported`` holds the 1-based line numbers of include directives that
    were skipped because their target is neither ``<...>`` nor ``"..."``.
    """

    includes: List[IncludeDirective] = field(default_factory=list)
    code_lines: int = 0
    unsupported: List[int] = field(default_factory=list)


def lexer_signature(*, strict: bool) -> str:
    """Identify the lexing rules in effect, for cache invalidation."""
    mode = "strict" if strict else "lenient"
    return f"lexer-{LEXER_VERSION}-{mode}"


def unsupported_directive_message(source_name: str, line: int) -> str:
    return f"{source_name}:{line}: unsupported include directive"


def count_text_lines(text: str) -> int:
    """Count physical lines; a trailing newline does not open a new line."""
    if not text:
        return 0
    lines = text.count("\n")
    if not text.endswith("\n"):
        lines += 1
    return lines


def lex(text: str, *, strict: bool = False, source_name: str = "<text>") -> LexResult:
    """Scan ``text`` and return its include directives and code line count.

    An unterminated block comment swallows the rest of the text. An include
    directive whose target is neither ``<...>`` nor ``"..."`` is skipped and its
    line is recorded in :attr:`LexResult.unsupported`, or raises
    :class:`DirectiveError` when ``strict`` is set.
    """
    result = LexResult()
    length = len(text)
    pos = 0
    while pos < length:
        if _is_blank(text[pos]):
            pos += 1
            continue
        if text.startswith("//", pos):
            pos = _next_line(text, pos)
            continue
        if text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            pos = length if close < 0 else close + 2
            continue

        result.code_lines += 1
        try:
            directive = _match_include(text, pos)
        except _UnsupportedDirective:
            line = text.count("\n", 0, pos) + 1
            if strict:
                raise DirectiveError(unsupported_directive_message(source_name, line)) from None
            result.unsupported.append(line)
            directive = None
        if directive is not None:
            result.includes.append(directive)
        pos = _next_line(text, pos)
    return result


def _is_blank(char: str) -> bool:
    return char.isspace() or unicodedata.category(char) == "Cc"


def _skip_blanks(text: str, pos: int) -> int:
    # Newlines count as blanks here too: "#\ninclude <a.h>" is still a directive.
    length = len(text)
    while pos < length and _is_blank(text[pos]):
        pos += 1
    return pos


def _next_line(text: str, pos: int) -> int:
    newline = text.find("\n", pos)
    return len(text) if newline < 0 else newline + 1


def _match_include(text: str, pos: int) -> Optional[IncludeDirective]:
    if text[pos] != "#":
        return None
    pos = _skip_blanks(text, pos + 1)
    if not text.startswith(_KEYWORD, pos):
        return None
    pos = _skip_blanks(text, pos + len(_KEYWORD))

    opener = text[pos : pos + 1]
    if opener not in _DELIMITERS:
        raise _UnsupportedDirective()

    closer, system = _DELIMITERS[opener]
    end = text.find(closer, pos + 1)
    if end < 0:
        return None
    return IncludeDirective(name=text[pos + 1 : end], system=system)


__all__ = [
    "LEXER_VERSION",
    "DirectiveError",
    "LexResult",
    "count_text_lines",
    "lex",
    "lexer_signature",
    "unsupported_directive_message",
]
