# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from reaxml.inputs.settings import Settings
from tests.utils import (
    all_types_feed,
    bad_content_feed,
    invalid_character_feed,
    listing_xml,
    mixed_content_feed,
    write_feed,
)


# -------- Isolate from the caller's environment --------
@pytest.fixture(autouse=True)
def _clean_reaxml_env(monkeypatch: pytest.MonkeyPatch):
    for key in ("REAXML_CLEAN_BAD_CHARS", "REAXML_KEEP_SOURCE", "REAXML_MAX_WORKERS"):
        monkeypatch.delenv(key, raising=False)
    yield


# -------- Canonical feeds --------
@pytest.fixture
def all_types_xml() -> str:
    return all_types_feed()


@pytest.fixture
def mixed_content_xml() -> str:
    return mixed_content_feed()


@pytest.fixture
def invalid_character_xml() -> str:
    return invalid_character_feed()


@pytest.fixture
def bad_content_xml() -> str:
    return bad_content_feed()


@pytest.fixture
def single_residential_xml() -> str:
    return listing_xml("residential", "current")


@pytest.fixture
def serial_settings() -> Settings:
    return Settings(max_workers=1)


@pytest.fixture
def feed_file_factory(tmp_path: Path):
    """
    Callable factory writing a feed into the test's tmp path.

    Usage:
        path = feed_file_factory(xml)
        path = feed_file_factory(xml, filename="other.xml", bom=True)
    """

    def _factory(xml: str, filename: str = "feed.xml", *, bom: bool = False) -> Path:
        return write_feed(tmp_path, xml, filename, bom=bom)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
