"""Character cursor and quote-aware tag boundary detection.

The top-level scanner, the subtree skipper and the attribute parser all walk
their input through :class:`Cursor`, so whitespace and quote handling stay
identical at every call site.
"""

from dataclasses import dataclass
from typing import Callable

WHITESPACE = frozenset(" \t\n\r\f")


def is_whitespace(c: str) -> bool:
    """Check if a single character is HTML whitespace.

    Args:
        c: Character to check. The empty string (end of input) is not whitespace.

    Returns:
        True for space, tab, line feed, carriage return or form feed.
    """
    return c in WHITESPACE


def is_not_whitespace(c: str) -> bool:
    return c not in WHITESPACE


class Cursor:
    """Forward-only position over a string.

    ``peek`` and ``advance`` return the empty string once the input is
    exhausted instead of raising.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        if self.at_end:
            return ""
        return self.text[self.pos]

    def advance(self) -> str:
        c = self.peek()
        if c:
            self.pos += 1
        return c

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while ``predicate`` holds and return them."""
        start = self.pos
        text = self.text
        end = len(text)
        while self.pos < end and predicate(text[self.pos]):
            self.pos += 1
        return text[start : self.pos]

    def read_until(self, stop: str) -> str:
        """Consume up to, not including, the next ``stop`` character.

        Consumes the rest of the input when ``stop`` does not occur again.
        """
        start = self.pos
        idx = self.text.find(stop, start)
        if idx < 0:
            idx = len(self.text)
        self.pos = idx
        return self.text[start:idx]


class QuoteState:
    """Single and double quote toggles for one tag.

    Each quote character flips its own flag. Balance across the two quote
    types is not validated, so an odd number of quotes keeps the state
    active and a later ``>`` is treated as content.
    """

    __slots__ = ("single", "double")

    def __init__(self) -> None:
        self.single = False
        self.double = False

    @property
    def active(self) -> bool:
        return self.single or self.double

    def toggle(self, c: str) -> None:
        if c == "'":
            self.single = not self.single
        elif c == '"':
            self.double = not self.double


@dataclass(frozen=True)
class RawTag:
    """Inner content of one ``<...>`` construct, brackets excluded."""

    inner: str
    terminated: bool = True

    @property
    def self_closing(self) -> bool:
        """Whether a ``/`` immediately precedes the closing ``>``."""
        return self.terminated and self.inner.endswith("/")

    @property
    def name(self) -> str:
        """Tag name used for allow-list lookups, with every ``/`` removed."""
        return tag_name(self.inner, strip_slashes=True)

    @property
    def raw_name(self) -> str:
        """Tag name as written, so close tags keep their leading ``/``."""
        return tag_name(self.inner, strip_slashes=False)


def tag_name(inner: str, strip_slashes: bool = False) -> str:
    """Extract the first non-empty whitespace-delimited token of a tag.

    Args:
        inner: Raw inner content of the tag.
        strip_slashes: Drop ``/`` characters while building the name.

    Returns:
        The tag name, or an empty string for a tag without one.
    """
    name = []
    for c in inner:
        if is_whitespace(c):
            if name:
                break
            continue
        if strip_slashes and c == "/":
            continue
        name.append(c)
    return "".join(name)


def read_tag(cursor: Cursor) -> RawTag:
    """Read a tag body from just after its ``<`` up to the closing ``>``.

    A ``>`` inside single or double quotes does not end the tag. The closing
    ``>`` is consumed but not included in the result.

    Args:
        cursor: Cursor positioned right after ``<``.

    Returns:
        RawTag with ``terminated=False`` when input ran out first.
    """
    quotes = QuoteState()
    chars = []
    while not cursor.at_end:
        c = cursor.advance()
        if c == ">" and not quotes.active:
            return RawTag(inner="".join(chars))
        quotes.toggle(c)
        chars.append(c)
    return RawTag(inner="".join(chars), terminated=False)
