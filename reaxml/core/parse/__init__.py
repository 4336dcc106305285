# reaxml/core/parse/__init__.py
from .aggregate import ResultAggregator
from .classify import LISTING_REGISTRY, LISTING_TAGS, Classified, ListingKind, Unhandled, classify, process_candidate
from .errors import (
    ENTIRE_DATA_SOURCE,
    FATAL_ERRORS,
    INVALID_DATA_HINT,
    DuplicateListingError,
    InvalidCharacterError,
    InvalidStatusError,
    InvalidValueError,
    ListingBuildError,
    MalformedXmlError,
    MissingUniqueIdError,
    ReaXmlError,
    UnsupportedRootError,
    build_error_guard,
    classify_build_error,
)
from .tree import BATCH_ROOT, RootMode, dispatch, parse_tree

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
    "BATCH_ROOT",
    "RootMode",
    "dispatch",
    "parse_tree",
    "LISTING_REGISTRY",
    "LISTING_TAGS",
    "ListingKind",
    "Classified",
    "Unhandled",
    "classify",
    "process_candidate",
    "ResultAggregator",
]
