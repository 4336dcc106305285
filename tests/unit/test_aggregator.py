# tests/unit/test_aggregator.py
from __future__ import annotations

import pytest
from pydantic import ValidationError

from reaxml.core.parse import ResultAggregator, Unhandled, process_candidate
from reaxml.schemas.models import ListingOutcome, ParsedResult, ParseError
from tests.utils import element, listing_xml


def _outcome(tag: str, status: str, unique_id: str = "ABCD1234") -> ListingOutcome:
    out = process_candidate(element(listing_xml(tag, status, unique_id)))
    assert isinstance(out, ListingOutcome)
    return out


def test_each_category_keeps_document_order():
    err_a = ParseError(exception_message="a", invalid_data="<a/>")
    err_b = ParseError(exception_message="b", invalid_data="<b/>")
    result = (
        ResultAggregator()
        .extend(
            [
                Unhandled("<one/>"),
                _outcome("rental", "current"),
                err_a,
                _outcome("land", "current"),
                Unhandled("<two/>"),
                err_b,
                _outcome("residential", "sold"),
            ]
        )
        .build()
    )

    assert result.listing_ids() == ["Rental-Current-ABCD1234", "Land-Current-ABCD1234", "Residential-Sold-ABCD1234"]
    assert result.unhandled == ("<one/>", "<two/>")
    assert result.errors == (err_a, err_b)
    assert not result.is_fatal


def test_duplicate_identifier_is_demoted_to_error():
    result = ResultAggregator().extend([_outcome("rural", "current"), _outcome("rural", "current")]).build()

    assert result.listing_ids() == ["Rural-Current-ABCD1234"]
    assert len(result.errors) == 1
    assert "'Rural-Current-ABCD1234' appears more than once" in result.errors[0].exception_message
    assert result.errors[0].invalid_data.startswith("<rural")


def test_empty_aggregate():
    result = ResultAggregator().build()
    assert result == ParsedResult()
    assert not result.is_fatal
    assert str(result) == "[ParsedResult] listings=0 unhandled=0 errors=0"


def test_result_is_immutable():
    result = ResultAggregator().extend([Unhandled("<x/>")]).build()
    with pytest.raises(ValidationError):
        result.unhandled = ()  # type: ignore[misc]


def test_fatal_result_shape():
    err = ParseError(exception_message="boom", invalid_data="The entire data source.")
    result = ParsedResult.fatal(err)
    assert result.listings == () and result.unhandled == ()
    assert result.errors == (err,)
    assert result.is_fatal
