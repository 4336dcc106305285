# reaxml/core/parse/errors.py
"""
Typed errors + utilities for the REA XML parser.

Exports
-------
- ReaXmlError, InvalidCharacterError, MalformedXmlError, UnsupportedRootError,
  ListingBuildError, MissingUniqueIdError, InvalidStatusError,
  InvalidValueError, DuplicateListingError
- FATAL_ERRORS
- ENTIRE_DATA_SOURCE, INVALID_DATA_HINT
- classify_build_error(exc, fragment)
- build_error_guard(fragment)

None of these cross the public `parse` boundary: each is converted to a
`ParseError` record with `to_parse_error()`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

from reaxml.schemas.models import ParseError

# `invalid_data` placeholders for whole-document failures
ENTIRE_DATA_SOURCE = "The entire data source."
INVALID_DATA_HINT = (
    "Failed to parse the provided xml data because it contains some invalid data. "
    "Pro Tip: This is usually because a character is not encoded. Like an ampersand."
)

# =========================
# Exception types
# =========================


class ReaXmlError(RuntimeError):
    """Base class for REA XML parsing failures."""

    def __init__(self, message: str, invalid_data: str) -> None:
        super().__init__(message)
        self.invalid_data = invalid_data

    def to_parse_error(self) -> ParseError:
        return ParseError(exception_message=str(self), invalid_data=self.invalid_data)


class InvalidCharacterError(ReaXmlError):
    """Raw text holds a character XML 1.0 forbids (and cleaning was not requested)."""


class MalformedXmlError(ReaXmlError):
    """Text could not be parsed into an element tree."""


class UnsupportedRootError(ReaXmlError):
    """Root element is neither <propertyList/> nor a listing segment."""


class ListingBuildError(ReaXmlError):
    """A recognized listing element could not be mapped; siblings carry on."""


class MissingUniqueIdError(ListingBuildError):
    """Listing has no usable <uniqueID/>."""


class InvalidStatusError(ListingBuildError):
    """Listing status attribute is missing or not valid for its type."""


class InvalidValueError(ListingBuildError):
    """A child element holds a value that cannot be converted (number, date, unit)."""


class DuplicateListingError(ListingBuildError):
    """A listing identifier already appeared earlier in the same document."""


# Whole-document failures: abort the invocation
FATAL_ERRORS = (
    InvalidCharacterError,
    MalformedXmlError,
    UnsupportedRootError,
)

# =========================
# Classification helpers
# =========================


def classify_build_error(exc: Exception, fragment: str) -> ListingBuildError:
    """
    Map an exception raised while building one listing to a ListingBuildError.

    Heuristics:
      - ListingBuildError subclasses → passed through
      - pydantic ValidationError     → InvalidValueError (first error location + message)
      - ValueError / TypeError       → InvalidValueError
      - Fallback                     → ListingBuildError
    """
    if isinstance(exc, ListingBuildError):
        return exc

    if isinstance(exc, ValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(p) for p in first.get("loc", ())) or exc.title
        return InvalidValueError(f"Invalid listing field '{loc}': {first.get('msg', exc)}", fragment)

    if isinstance(exc, (ValueError, TypeError)):
        return InvalidValueError(str(exc), fragment)

    return ListingBuildError(f"{type(exc).__name__}: {exc}", fragment)


@contextmanager
def build_error_guard(fragment: str) -> Iterator[None]:
    """Normalize unexpected exceptions from one listing build into a ListingBuildError."""
    try:
        yield
    except FATAL_ERRORS:
        raise
    except ListingBuildError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_build_error(exc, fragment) from exc


__all__ = [
    "ReaXmlError",
    "InvalidCharacterError",
    "MalformedXmlError",
    "UnsupportedRootError",
    "ListingBuildError",
    "MissingUniqueIdError",
    "InvalidStatusError",
    "InvalidValueError",
    "DuplicateListingError",
    "FATAL_ERRORS",
    "ENTIRE_DATA_SOURCE",
    "INVALID_DATA_HINT",
    "classify_build_error",
    "build_error_guard",
]
