"""Scanning primitives: cursor, tag boundaries and attribute filtering."""

from .attributes import AttributeSanitizer, sanitize_tag_content
from .cursor import Cursor, QuoteState, RawTag, is_whitespace, read_tag, tag_name

__all__ = [
    "AttributeSanitizer",
    "Cursor",
    "QuoteState",
    "RawTag",
    "is_whitespace",
    "read_tag",
    "sanitize_tag_content",
    "tag_name",
]
