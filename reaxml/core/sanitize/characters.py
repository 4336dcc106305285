# reaxml/core/sanitize/characters.py
"""
Raw-text pre-pass for characters that XML 1.0 forbids.

Feeds exported by some CRMs carry stray control characters (0x0B, 0x16, ...)
copied in from word processors. They make the whole document unparsable, so
callers may choose to drop them before tree parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Complement of the XML 1.0 `Char` production.
_INVALID_XML_CHAR_RE = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


@dataclass(frozen=True)
class InvalidCharacter:
    """Location of the first forbidden character in a document (1-based line/column)."""

    char: str
    offset: int
    line: int
    column: int

    @property
    def code(self) -> int:
        return ord(self.char)


def sanitize(text: str, enabled: bool) -> str:
    """Remove forbidden characters when `enabled`; otherwise return `text` untouched."""
    if not enabled or not text:
        return text
    return _INVALID_XML_CHAR_RE.sub("", text)


def find_invalid_character(text: str) -> InvalidCharacter | None:
    m = _INVALID_XML_CHAR_RE.search(text)
    if m is None:
        return None
    offset = m.start()
    line_start = text.rfind("\n", 0, offset) + 1
    return InvalidCharacter(
        char=m.group(0),
        offset=offset,
        line=text.count("\n", 0, offset) + 1,
        column=offset - line_start + 1,
    )
