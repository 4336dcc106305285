# reaxml/__init__.py
from reaxml.tools.feed_parser import parse, parse_file

__all__ = ["parse", "parse_file"]
