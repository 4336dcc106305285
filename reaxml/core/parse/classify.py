# reaxml/core/parse/classify.py
"""
Listing classifier: (element name, status attribute) → builder.

The registry is a flat dict keyed by `(tag, status)`, so adding a listing type
or status is one table entry. Elements whose tag is not a listing type are
returned as `Unhandled` fragments (never errors). A listing tag with a missing
or foreign status is a per-item InvalidStatusError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from lxml import etree

from reaxml.core.parse.builders import build_land, build_rental, build_residential, build_rural
from reaxml.core.parse.errors import InvalidStatusError, ListingBuildError, build_error_guard
from reaxml.core.parse.fields import attr_of, fragment_of, local_name
from reaxml.schemas.models import AnyListing, ListingOutcome, ListingType, ParseError, StatusType

logger = logging.getLogger(__name__)

Builder = Callable[[etree._Element, StatusType, str], AnyListing]

_STATUS_WORDS: dict[str, StatusType] = {
    "current": StatusType.current,
    "sold": StatusType.sold,
    "leased": StatusType.leased,
    "withdrawn": StatusType.withdrawn,
    "offmarket": StatusType.off_market,
    "deleted": StatusType.deleted,
}

# tag → (type, builder, statuses published for that type)
_SALE_STATUSES = ("current", "sold", "withdrawn", "offmarket", "deleted")
_LEASE_STATUSES = ("current", "leased", "withdrawn", "offmarket", "deleted")
_LISTING_TYPES: dict[str, tuple[ListingType, Builder, tuple[str, ...]]] = {
    "residential": (ListingType.residential, build_residential, _SALE_STATUSES),
    "rental": (ListingType.rental, build_rental, _LEASE_STATUSES),
    "land": (ListingType.land, build_land, _SALE_STATUSES),
    "rural": (ListingType.rural, build_rural, _SALE_STATUSES),
}


@dataclass(frozen=True)
class ListingKind:
    listing_type: ListingType
    status: StatusType
    builder: Builder

    def build(self, el: etree._Element, fragment: str) -> AnyListing:
        return self.builder(el, self.status, fragment)


LISTING_REGISTRY: dict[tuple[str, str], ListingKind] = {
    (tag, word): ListingKind(listing_type, _STATUS_WORDS[word], builder)
    for tag, (listing_type, builder, words) in _LISTING_TYPES.items()
    for word in words
}

LISTING_TAGS = frozenset(_LISTING_TYPES)


@dataclass(frozen=True)
class Classified:
    kind: ListingKind


@dataclass(frozen=True)
class Unhandled:
    fragment: str


ElementOutcome = ListingOutcome | Unhandled | ParseError


def classify(el: etree._Element, fragment: str) -> Classified | Unhandled:
    tag = local_name(el)
    if tag not in LISTING_TAGS:
        return Unhandled(fragment)

    status = (attr_of(el, "status") or "").lower()
    kind = LISTING_REGISTRY.get((tag, status))
    if kind is None:
        allowed = ", ".join(_LISTING_TYPES[tag][2])
        found = f"'{attr_of(el, 'status')}'" if status else "no status"
        raise InvalidStatusError(
            f"Unable to determine the status of a <{tag}/> listing: found {found}, expected one of: {allowed}.",
            fragment,
        )
    return Classified(kind)


def process_candidate(el: etree._Element, *, keep_source: bool = True) -> ElementOutcome:
    """
    Classify and build one candidate element.

    Never raises for bad listing data: per-item failures come back as a
    ParseError carrying the element's outer XML.
    """
    fragment = fragment_of(el)
    try:
        with build_error_guard(fragment):
            found = classify(el, fragment)
            if isinstance(found, Unhandled):
                logger.info("Unhandled element <%s/> kept as raw fragment", local_name(el))
                return found
            listing = found.kind.build(el, fragment)
    except ListingBuildError as exc:
        logger.warning("Listing skipped: %s", exc)
        return exc.to_parse_error()

    return ListingOutcome(listing=listing, raw_source=fragment if keep_source else None)
