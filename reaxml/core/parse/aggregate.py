# reaxml/core/parse/aggregate.py
"""
Result aggregator: per-element outcomes → one frozen ParsedResult.

Outcomes must be added in document order; each category keeps that order.
A listing whose identifier was already produced earlier in the same document
is demoted to a DuplicateListingError entry.
"""

from __future__ import annotations

from collections.abc import Iterable

from reaxml.core.parse.classify import ElementOutcome, Unhandled
from reaxml.core.parse.errors import DuplicateListingError
from reaxml.schemas.models import ListingOutcome, ParsedResult, ParseError


class ResultAggregator:
    def __init__(self) -> None:
        self._listings: list[ListingOutcome] = []
        self._unhandled: list[str] = []
        self._errors: list[ParseError] = []
        self._seen_ids: set[str] = set()

    def add(self, outcome: ElementOutcome) -> None:
        if isinstance(outcome, Unhandled):
            self._unhandled.append(outcome.fragment)
        elif isinstance(outcome, ParseError):
            self._errors.append(outcome)
        elif outcome.listing.id in self._seen_ids:
            dup = DuplicateListingError(
                f"The listing '{outcome.listing.id}' appears more than once in the data provided; only the first was kept.",
                outcome.raw_source or outcome.listing.id,
            )
            self._errors.append(dup.to_parse_error())
        else:
            self._seen_ids.add(outcome.listing.id)
            self._listings.append(outcome)

    def extend(self, outcomes: Iterable[ElementOutcome]) -> ResultAggregator:
        for outcome in outcomes:
            self.add(outcome)
        return self

    def build(self) -> ParsedResult:
        return ParsedResult(
            listings=tuple(self._listings),
            unhandled=tuple(self._unhandled),
            errors=tuple(self._errors),
        )
