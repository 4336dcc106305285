# reaxml/core/sanitize/__init__.py
from .characters import InvalidCharacter, find_invalid_character, sanitize
from .markup import strip_markup

__all__ = [
    "InvalidCharacter",
    "find_invalid_character",
    "sanitize",
    "strip_markup",
]
