"""
REA XML tools package

Exports only modules that live under `reaxml/tools`:
  - parse / parse_file    (from .feed_parser)

Lower-level pieces (sanitizers, tree parser, classifier) should be imported
directly from `reaxml.core`.
"""

from __future__ import annotations

from .feed_parser import parse, parse_file

__all__ = ["parse", "parse_file"]
