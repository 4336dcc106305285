# reaxml/core/parse/fields.py
"""
Typed readers for REA XML child elements.

Every reader takes the parent element plus a child path and returns None when
the child is absent or blank. Present-but-unreadable values raise
InvalidValueError, which fails only the listing being built.
"""

from __future__ import annotations

import re
from datetime import datetime

from lxml import etree

from reaxml.core.parse.errors import InvalidValueError
from reaxml.schemas.models import UnitOfMeasure

# ---------- Regex & format tables ----------

# REA stamps: 2009-01-01-12:30:00, 2009-01-01T12:30:00, 20090101-123000, 2009-01-01 ...
_DATE_FORMATS = (
    "%Y-%m-%d-%H:%M:%S",
    "%Y-%m-%d-%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y%m%d-%H%M%S",
    "%Y%m%d-%H:%M:%S",
    "%Y-%m-%d",
    "%Y%m%d",
)

_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")

_TRUE_WORDS = {"yes", "true", "1", "y"}
_FALSE_WORDS = {"no", "false", "0", "n"}

# ---------- Helpers ----------


def local_name(el: etree._Element) -> str:
    """Tag name without any namespace."""
    return etree.QName(el).localname


def fragment_of(el: etree._Element) -> str:
    """Verbatim outer XML of `el`, without the trailing text that follows it."""
    return etree.tostring(el, encoding="unicode", with_tail=False)


def any_ns(path: str) -> str:
    """'images/img' → '{*}images/{*}img': match each step in any (or no) namespace."""
    return "/".join(f"{{*}}{step}" for step in path.split("/"))


def child(el: etree._Element | None, path: str) -> etree._Element | None:
    return el.find(any_ns(path)) if el is not None else None


def children(el: etree._Element | None, path: str) -> list[etree._Element]:
    return el.findall(any_ns(path)) if el is not None else []


def _clean_num(text: str) -> str:
    # "$450,000" / "450 000" → "450000"
    return text.replace("$", "").replace(",", "").replace(" ", "").replace("\u00a0", "").strip()


# ---------- Public readers ----------


def text_of(el: etree._Element | None, path: str | None = None) -> str | None:
    """Stripped text content (including nested elements) of `el/path`, or None."""
    if el is None:
        return None
    target = child(el, path) if path else el
    if target is None:
        return None
    value = "".join(target.itertext()).strip()
    return value or None


def attr_of(el: etree._Element | None, name: str) -> str | None:
    if el is None:
        return None
    value = (el.get(name) or "").strip()
    return value or None


def parse_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    return default


def parse_float(value: str | None, field: str, fragment: str) -> float | None:
    if value is None:
        return None
    cleaned = _clean_num(value)
    if not _NUMBER_RE.match(cleaned):
        raise InvalidValueError(f"Element <{field}/> has a value '{value}' that is not a number.", fragment)
    return float(cleaned)


def parse_int(value: str | None, field: str, fragment: str) -> int | None:
    number = parse_float(value, field, fragment)
    if number is None:
        return None
    if not number.is_integer():
        raise InvalidValueError(f"Element <{field}/> has a value '{value}' that is not a whole number.", fragment)
    return int(number)


def parse_count(value: str | None, field: str, fragment: str) -> int:
    """Feature counts; REA also publishes 'yes'/'no' for single-item features."""
    if value is None:
        return 0
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS - {"1"}:
        return 1
    if lowered in _FALSE_WORDS - {"0"}:
        return 0
    return parse_int(value, field, fragment) or 0


def parse_datetime(value: str | None, field: str, fragment: str) -> datetime | None:
    if value is None:
        return None
    stamp = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(stamp, fmt)
        except ValueError:
            continue
    raise InvalidValueError(f"Element <{field}/> has a value '{value}' that is not a recognised date.", fragment)


def parse_unit(el: etree._Element | None, field: str, fragment: str) -> UnitOfMeasure | None:
    """<area unit="squareMeter">80</area> → UnitOfMeasure(type='squareMeter', value=80.0)."""
    value = parse_float(text_of(el), field, fragment)
    if value is None:
        return None
    return UnitOfMeasure(type=attr_of(el, "unit") or "unknown", value=value)
