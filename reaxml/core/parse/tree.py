# reaxml/core/parse/tree.py
"""
Tree parser + root dispatcher.

`parse_tree` is the only place raw text meets lxml. Failures are raised as the
typed fatal errors from `errors.py`; `dispatch` then decides between a
<propertyList/> batch and a single listing segment.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from lxml import etree

from reaxml.core.parse.classify import LISTING_TAGS
from reaxml.core.parse.errors import (
    ENTIRE_DATA_SOURCE,
    INVALID_DATA_HINT,
    InvalidCharacterError,
    MalformedXmlError,
    UnsupportedRootError,
)
from reaxml.core.parse.fields import local_name
from reaxml.core.sanitize import find_invalid_character

logger = logging.getLogger(__name__)

BATCH_ROOT = "propertyList"

# lxml refuses str input that carries an encoding declaration
_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>")
_BOM = chr(0xFEFF)

_BAD_CHARACTER_HELP = (
    "Suggested Solution: Either set the 'areBadCharactersRemoved' parameter to 'true' so invalid characters "
    "are removed automatically OR manually remove the errors from the file OR manually handle the error "
    "(eg. notify the people who sent you this data, that it contains bad data and they should clean it up.)"
)


def _make_parser() -> etree.XMLParser:
    # One parser per call: lxml parsers are not safe to share across threads.
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True, remove_comments=False)


def parse_tree(text: str) -> etree._Element:
    """
    Parse raw feed text into an element tree.

    Raises
    ------
    InvalidCharacterError  text holds a character XML 1.0 forbids
    MalformedXmlError      text is empty or not well-formed
    """
    bad = find_invalid_character(text)
    if bad is not None:
        raise InvalidCharacterError(
            f"The REA Xml data provided contains some invalid characters. Line: {bad.line}, Position: {bad.column}. "
            f"Error: '{bad.char}', hexadecimal value 0x{bad.code:02X}, is an invalid character. {_BAD_CHARACTER_HELP}",
            ENTIRE_DATA_SOURCE,
        )

    body = _XML_DECL_RE.sub("", text.lstrip(_BOM), count=1)
    if not body.strip():
        raise MalformedXmlError("The REA Xml data provided is empty.", INVALID_DATA_HINT)

    try:
        return etree.fromstring(body, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        line, column = exc.position
        raise MalformedXmlError(
            f"The REA Xml data provided is not well-formed. Line: {line}, Position: {column}. Error: {exc.msg}",
            INVALID_DATA_HINT,
        ) from exc
    except ValueError as exc:
        # e.g. an encoding declaration that is not at the start of the document
        raise MalformedXmlError(f"The REA Xml data provided is not well-formed. Error: {exc}", INVALID_DATA_HINT) from exc


@dataclass(frozen=True)
class RootMode:
    root: etree._Element
    batch: bool

    def candidates(self) -> Iterator[etree._Element]:
        """Elements handed to the classifier, in document order."""
        if not self.batch:
            yield self.root
            return
        for child in self.root:
            # comments / processing instructions have a non-str tag
            if isinstance(child.tag, str):
                yield child


def dispatch(root: etree._Element) -> RootMode:
    name = local_name(root)
    if name == BATCH_ROOT:
        logger.debug("Dispatching <%s/> in batch mode", name)
        return RootMode(root=root, batch=True)
    if name in LISTING_TAGS:
        logger.debug("Dispatching single <%s/> listing", name)
        return RootMode(root=root, batch=False)

    raise UnsupportedRootError(
        "Unable to parse the xml data provided. Currently, only a <propertyList/> or listing segments "
        f"<residential/> / <rental/> / <land/> / <rural/>. Root node found: '{name}'.",
        INVALID_DATA_HINT,
    )
