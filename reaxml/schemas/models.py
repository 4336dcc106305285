# reaxml/schemas/models.py

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =========================
# Enumerations
# =========================


class ListingType(str, Enum):
    """Listing category; the value is the identifier prefix."""

    residential = "Residential"
    rental = "Rental"
    land = "Land"
    rural = "Rural"


class StatusType(str, Enum):
    """Lifecycle status of a listing."""

    current = "Current"
    sold = "Sold"
    leased = "Leased"
    withdrawn = "Withdrawn"
    off_market = "OffMarket"
    deleted = "Deleted"


# =========================
# Shared building blocks
# =========================


class UnitOfMeasure(BaseModel):
    """A measured quantity (land area, frontage, floor area) with its REA unit name."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(..., description="Unit name as published, e.g. 'squareMeter', 'acre', 'meter'.")
    value: float = Field(..., ge=0, description="Measured value in `type` units.")


class Address(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    display: bool = True
    sub_number: str | None = None
    street_number: str | None = None
    street: str | None = None
    suburb: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None

    def line(self) -> str:
        """Single-line rendering, e.g. '2/39 Main Road, Richmond VIC 3121'."""
        number = "/".join(p for p in (self.sub_number, self.street_number) if p)
        street = " ".join(p for p in (number, self.street) if p)
        locality = " ".join(p for p in (self.suburb, self.state, self.postcode) if p)
        return ", ".join(p for p in (street, locality) if p)


class Features(BaseModel):
    """Room and parking counts. Unknowns stay 0."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    ensuites: int = Field(0, ge=0)
    toilets: int = Field(0, ge=0)
    garages: int = Field(0, ge=0)
    carports: int = Field(0, ge=0)
    open_spaces: int = Field(0, ge=0)
    tags: tuple[str, ...] = Field(default_factory=tuple, description="Boolean feature flags that were set, e.g. 'airConditioning'.")


class Agent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    order: int = Field(1, ge=1, description="Position in the listing's agent list (REA `id` attribute).")
    email: str | None = None
    phones: tuple[str, ...] = Field(default_factory=tuple)


class Media(BaseModel):
    """Image or floorplan reference. Only entries with a URL are kept."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    url: str
    order: int = Field(..., ge=1)
    updated_on: datetime | None = None


class LandDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    area: UnitOfMeasure | None = None
    frontage: UnitOfMeasure | None = None
    depths: tuple[UnitOfMeasure, ...] = Field(default_factory=tuple)
    cross_over: str | None = None


class BuildingDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    area: UnitOfMeasure | None = None
    energy_rating: float | None = Field(None, ge=0)


class SoldDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    price: float | None = Field(None, ge=0)
    display_price: bool = True
    sold_on: datetime | None = None


# =========================
# Listings
# =========================


class Listing(BaseModel):
    """Fields shared by every listing variant."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Composite identifier '{Type}-{Status}-{SourceId}'.")
    agency_id: str | None = None
    status_type: StatusType
    title: str = ""
    description: str = ""
    updated_on: datetime | None = None

    address: Address | None = None
    features: Features = Field(default_factory=Features)
    agents: tuple[Agent, ...] = Field(default_factory=tuple)
    images: tuple[Media, ...] = Field(default_factory=tuple)
    floorplans: tuple[Media, ...] = Field(default_factory=tuple)
    land_details: LandDetails | None = None
    building_details: BuildingDetails | None = None

    @field_validator("id")
    @classmethod
    def _id_has_three_parts(cls, v: str) -> str:
        parts = v.split("-", 2)
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"listing id must look like 'Type-Status-SourceId', got {v!r}")
        return v

    def summary(self) -> str:
        bits = [self.id]
        if self.title:
            bits.append(self.title)
        if self.address:
            bits.append(self.address.line())
        return " | ".join(bits)


class ResidentialListing(Listing):
    listing_type: Literal[ListingType.residential] = ListingType.residential

    category: str | None = Field(None, description="Property type, e.g. 'House', 'Unit'.")
    price: float | None = Field(None, ge=0)
    price_view: str | None = None
    auction_on: datetime | None = None
    sold: SoldDetails | None = None


class RentalListing(Listing):
    listing_type: Literal[ListingType.rental] = ListingType.rental

    category: str | None = None
    rent: float | None = Field(None, ge=0)
    rent_period: str | None = Field(None, description="Payment period as published, e.g. 'week', 'month'.")
    bond: float | None = Field(None, ge=0)
    available_on: datetime | None = None


class LandListing(Listing):
    listing_type: Literal[ListingType.land] = ListingType.land

    category: str | None = None
    price: float | None = Field(None, ge=0)
    price_view: str | None = None
    estate_name: str | None = None
    estate_stage: str | None = None
    sold: SoldDetails | None = None


class RuralListing(Listing):
    listing_type: Literal[ListingType.rural] = ListingType.rural

    category: str | None = None
    price: float | None = Field(None, ge=0)
    price_view: str | None = None
    sold: SoldDetails | None = None


AnyListing = ResidentialListing | RentalListing | LandListing | RuralListing


# =========================
# Parse results
# =========================


class ParseError(BaseModel):
    """One problem found in the feed, recorded as data rather than raised."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    exception_message: str = Field(..., description="Human-readable cause.")
    invalid_data: str = Field(..., description="Offending fragment, or a fixed description when the whole document is unusable.")


class ListingOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    listing: AnyListing = Field(..., discriminator="listing_type")
    raw_source: str | None = Field(None, description="Verbatim outer XML of the listing element, if kept.")


class ParsedResult(BaseModel):
    """
    Sole return value of a parse invocation.

    Callers tell total failure from partial success by inspecting the three
    sequences; nothing here is ever raised.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    listings: tuple[ListingOutcome, ...] = Field(default_factory=tuple)
    unhandled: tuple[str, ...] = Field(default_factory=tuple, description="Well-formed fragments that are not listings.")
    errors: tuple[ParseError, ...] = Field(default_factory=tuple)

    @classmethod
    def fatal(cls, error: ParseError) -> ParsedResult:
        return cls(errors=(error,))

    @property
    def is_fatal(self) -> bool:
        return bool(self.errors) and not self.listings and not self.unhandled

    def listing_ids(self) -> list[str]:
        return [o.listing.id for o in self.listings]

    def summary(self) -> str:
        return f"[ParsedResult] listings={len(self.listings)} unhandled={len(self.unhandled)} errors={len(self.errors)}"

    def __str__(self) -> str:
        return self.summary()
