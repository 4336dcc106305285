# reaxml/core/parse/builders.py
"""
Listing builders (REA XML element → typed listing).

One public builder per listing type. Each receives an element already
classified by `classify.py`, reads the common block (identifier, agency, free
text, address, features, agents, media, land/building details) and its own
payload, and returns a frozen listing model.

Free text (headline/description) goes through `strip_markup` before
assignment. Identifiers are always composed here as
'{Type}-{Status}-{uniqueID}'.
"""

from __future__ import annotations

from typing import Any

from lxml import etree

from reaxml.core.parse.errors import MissingUniqueIdError
from reaxml.core.parse.fields import (
    attr_of,
    child,
    children,
    local_name,
    parse_bool,
    parse_count,
    parse_datetime,
    parse_float,
    parse_int,
    parse_unit,
    text_of,
)
from reaxml.core.sanitize import strip_markup
from reaxml.schemas.models import (
    Address,
    Agent,
    BuildingDetails,
    Features,
    LandDetails,
    LandListing,
    ListingType,
    Media,
    RentalListing,
    ResidentialListing,
    RuralListing,
    SoldDetails,
    StatusType,
)

# features/<child> → Features field; anything else set to yes/true/1 becomes a tag
_FEATURE_COUNTS = {
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "ensuite": "ensuites",
    "toilets": "toilets",
    "garages": "garages",
    "carports": "carports",
    "openSpaces": "open_spaces",
}


def make_listing_id(listing_type: ListingType, status: StatusType, source_id: str) -> str:
    return f"{listing_type.value}-{status.value}-{source_id}"


# ---------- Common block ----------


def _address(el: etree._Element) -> Address | None:
    node = child(el, "address")
    if node is None:
        return None
    return Address(
        display=parse_bool(attr_of(node, "display"), default=True),
        sub_number=text_of(node, "subNumber"),
        street_number=text_of(node, "streetNumber"),
        street=text_of(node, "street"),
        suburb=text_of(node, "suburb"),
        state=text_of(node, "state"),
        postcode=text_of(node, "postcode"),
        country=text_of(node, "country"),
    )


def _features(el: etree._Element, fragment: str) -> Features:
    node = child(el, "features")
    if node is None:
        return Features()

    counts: dict[str, int] = {}
    tags: list[str] = []
    for item in node:
        if not isinstance(item.tag, str):
            continue
        name = local_name(item)
        if name in _FEATURE_COUNTS:
            counts[_FEATURE_COUNTS[name]] = parse_count(text_of(item), name, fragment)
        elif parse_bool(text_of(item), default=False):
            tags.append(name)
    return Features(**counts, tags=tuple(tags))


def _agents(el: etree._Element, fragment: str) -> tuple[Agent, ...]:
    agents: list[Agent] = []
    for position, node in enumerate(children(el, "listingAgent"), 1):
        name = text_of(node, "name")
        if not name:
            # REA sends empty <listingAgent/> placeholders
            continue
        phones = tuple(p for p in (text_of(t) for t in children(node, "telephone")) if p)
        agents.append(
            Agent(
                name=name,
                order=parse_int(attr_of(node, "id"), "listingAgent", fragment) or position,
                email=text_of(node, "email"),
                phones=phones,
            )
        )
    return tuple(sorted(agents, key=lambda a: a.order))


def _media(nodes: list[etree._Element], fragment: str) -> tuple[Media, ...]:
    out: list[Media] = []
    for position, node in enumerate(nodes, 1):
        url = attr_of(node, "url") or attr_of(node, "file")
        if not url:
            continue
        out.append(
            Media(
                id=attr_of(node, "id") or str(position),
                url=url,
                order=position,
                updated_on=parse_datetime(attr_of(node, "modTime"), local_name(node), fragment),
            )
        )
    return tuple(out)


def _land_details(el: etree._Element, fragment: str) -> LandDetails | None:
    node = child(el, "landDetails")
    if node is None:
        return None
    return LandDetails(
        area=parse_unit(child(node, "area"), "area", fragment),
        frontage=parse_unit(child(node, "frontage"), "frontage", fragment),
        depths=tuple(d for d in (parse_unit(n, "depth", fragment) for n in children(node, "depth")) if d),
        cross_over=attr_of(child(node, "crossOver"), "value"),
    )


def _building_details(el: etree._Element, fragment: str) -> BuildingDetails | None:
    node = child(el, "buildingDetails")
    if node is None:
        return None
    return BuildingDetails(
        area=parse_unit(child(node, "area"), "area", fragment),
        energy_rating=parse_float(text_of(node, "energyRating"), "energyRating", fragment),
    )


def _sold(el: etree._Element, fragment: str) -> SoldDetails | None:
    node = child(el, "soldDetails")
    if node is None:
        return None
    price_node = child(node, "soldPrice")
    return SoldDetails(
        price=parse_float(text_of(price_node), "soldPrice", fragment),
        display_price=parse_bool(attr_of(price_node, "display"), default=True),
        sold_on=parse_datetime(text_of(node, "soldDate"), "soldDate", fragment),
    )


def _common(el: etree._Element, listing_type: ListingType, status: StatusType, fragment: str) -> dict[str, Any]:
    source_id = text_of(el, "uniqueID")
    if not source_id:
        raise MissingUniqueIdError(
            f"A <{local_name(el)}/> listing with status '{status.value}' is missing its <uniqueID/> value.",
            fragment,
        )

    mod_time = attr_of(el, "modTime") or text_of(el, "modTime")
    objects = child(el, "objects")
    images = children(el, "images/img") + children(objects, "img")
    floorplans = children(objects, "floorplan")

    return {
        "id": make_listing_id(listing_type, status, source_id),
        "agency_id": text_of(el, "agentID"),
        "status_type": status,
        "title": strip_markup(text_of(el, "headline")),
        "description": strip_markup(text_of(el, "description")),
        "updated_on": parse_datetime(mod_time, "modTime", fragment),
        "address": _address(el),
        "features": _features(el, fragment),
        "agents": _agents(el, fragment),
        "images": _media(images, fragment),
        "floorplans": _media(floorplans, fragment),
        "land_details": _land_details(el, fragment),
        "building_details": _building_details(el, fragment),
    }


# ---------- Public builders ----------


def build_residential(el: etree._Element, status: StatusType, fragment: str) -> ResidentialListing:
    auction = child(el, "auction")
    return ResidentialListing(
        **_common(el, ListingType.residential, status, fragment),
        category=attr_of(child(el, "category"), "name"),
        price=parse_float(text_of(el, "price"), "price", fragment),
        price_view=text_of(el, "priceView"),
        auction_on=parse_datetime(attr_of(auction, "date") or text_of(auction), "auction", fragment),
        sold=_sold(el, fragment),
    )


def build_rental(el: etree._Element, status: StatusType, fragment: str) -> RentalListing:
    rent = child(el, "rent")
    return RentalListing(
        **_common(el, ListingType.rental, status, fragment),
        category=attr_of(child(el, "category"), "name"),
        rent=parse_float(text_of(rent), "rent", fragment),
        rent_period=attr_of(rent, "period"),
        bond=parse_float(text_of(el, "bond"), "bond", fragment),
        available_on=parse_datetime(text_of(el, "dateAvailable"), "dateAvailable", fragment),
    )


def build_land(el: etree._Element, status: StatusType, fragment: str) -> LandListing:
    return LandListing(
        **_common(el, ListingType.land, status, fragment),
        category=attr_of(child(el, "landCategory"), "name"),
        price=parse_float(text_of(el, "price"), "price", fragment),
        price_view=text_of(el, "priceView"),
        estate_name=text_of(el, "estate/name"),
        estate_stage=text_of(el, "estate/stage"),
        sold=_sold(el, fragment),
    )


def build_rural(el: etree._Element, status: StatusType, fragment: str) -> RuralListing:
    return RuralListing(
        **_common(el, ListingType.rural, status, fragment),
        category=attr_of(child(el, "ruralCategory"), "name"),
        price=parse_float(text_of(el, "price"), "price", fragment),
        price_view=text_of(el, "priceView"),
        sold=_sold(el, fragment),
    )
