# reaxml/core/sanitize/markup.py
"""
Inline markup stripper for free-text listing fields (headline, description).

Agents paste HTML into headlines and descriptions, but the same fields also
carry prose such as "price < $500k". Only syntactically valid tags are removed;
any other '<' or '>' is kept exactly as written.

Scanner
-------
Single forward scan, no recursion. Plain text is copied until a '<', where the
tag grammar is tried:
  - opening tag         → pushed on a per-name stack, removed once its close arrives
  - closing tag         → removed (pops its partner if there is one)
  - self-closing / void → removed
  - anything else       → '<' kept literally, scan resumes after it
Opening tags that never see a close stay as written. Every step is linear in
the input.
"""

from __future__ import annotations

import re

# <name attr="v" attr2='v' flag>  |  </name>  |  <name/>
_TAG_RE = re.compile(
    r"""
    <(?P<closing>/)?
    (?P<name>[A-Za-z][A-Za-z0-9:_.-]*)
    (?P<attrs>(?:\s+[^\s<>/="']+(?:\s*=\s*(?:"[^"<>]*"|'[^'<>]*'|[^\s"'<>=`]+))?)*)
    \s*(?P<self_closing>/)?>
    """,
    re.VERBOSE,
)

# HTML elements that never have a closing counterpart.
_VOID_TAGS = frozenset({"br", "hr", "img", "wbr"})


def _strip_pass(text: str) -> tuple[str, bool]:
    """
    One forward scan. Returns (output, spliced).

    Opening tags are emitted verbatim and their index pushed on a per-name
    stack; a later closing tag pops its partner and blanks it. Whatever is
    still on a stack at the end had no close and stays as written.

    `spliced` is True when a tag was removed and a literal '<' was kept in the
    same pass: only then can the output hold a tag the input did not.
    """
    pieces: list[str] = []
    pending: dict[str, list[int]] = {}
    removed = literal = False
    i = 0
    n = len(text)
    while i < n:
        lt = text.find("<", i)
        if lt == -1:
            pieces.append(text[i:])
            break
        if lt > i:
            pieces.append(text[i:lt])

        m = _TAG_RE.match(text, lt)
        if m is None:
            pieces.append("<")
            literal = True
            i = lt + 1
            continue

        i = m.end()
        name = m.group("name")
        if m.group("closing"):
            opens = pending.get(name)
            if opens:
                pieces[opens.pop()] = ""
            removed = True
        elif m.group("self_closing") or name.lower() in _VOID_TAGS:
            removed = True
        else:
            pending.setdefault(name, []).append(len(pieces))
            pieces.append(m.group(0))
    return "".join(pieces), removed and literal


def strip_markup(text: str | None) -> str:
    """
    Remove well-formed inline tags from `text`, keeping their inner text.

    >>> strip_markup("The price of apples are < the price of <b>oranges</b>")
    'The price of apples are < the price of oranges'
    """
    if not text:
        return ""
    stripped, spliced = _strip_pass(text)
    # e.g. "<<b></b>b>" → "<b>": rescan only when removal joined a stray '<' to text
    while spliced:
        stripped, spliced = _strip_pass(stripped)
    return stripped
