"""Attribute filtering for the inner content of an allowed tag."""

import logging
import re
from typing import AbstractSet, List, Optional, Tuple

from ...domain.models import PolicyFlags
from .cursor import Cursor, is_not_whitespace, is_whitespace

logger = logging.getLogger(__name__)

JAVASCRIPT_PREFIX = re.compile(r"^[\"']?javascript:", re.IGNORECASE)
QUOTES = ("'", '"')
UNSAFE_UNQUOTED = frozenset("<>'\"`")


def strip_querystring(value: str) -> str:
    """Remove everything from the first ``?`` onward."""
    return value.split("?", 1)[0]


def has_javascript_prefix(value: str) -> bool:
    """Check for a ``javascript:`` scheme, optionally behind one quote character."""
    return JAVASCRIPT_PREFIX.match(value) is not None


def _is_name_char(c: str) -> bool:
    return c != "=" and not is_whitespace(c)


class AttributeSanitizer:
    """Rebuilds a tag's inner content keeping only permitted attributes.

    The tag name and all whitespace between attributes are copied verbatim.
    Kept values are re-emitted with their original quote character, or
    unquoted when they were unquoted in the input. An unquoted value holding
    ``<``, ``>``, a quote or a backtick is dropped, since unbalanced quotes
    can pull markup from after the intended ``>`` into the tag.

    Usage:
        ```python
        sanitizer = AttributeSanitizer({"href"}, PolicyFlags())
        sanitizer.sanitize('a href="/page?x=1" onclick="go()"')
        # 'a href="/page" '
        ```
    """

    def __init__(self, allowed: AbstractSet[str], policy: PolicyFlags) -> None:
        """Initialize the sanitizer.

        Args:
            allowed: Attribute names permitted on this tag.
            policy: Query-string and javascript-prefix policy.
        """
        self.allowed = allowed
        self.policy = policy
        self.dropped = 0

    def sanitize(self, inner: str) -> str:
        """Filter the attributes of one tag.

        Args:
            inner: Tag content between ``<`` and ``>``, tag name included.

        Returns:
            The tag content with disallowed or unsafe attributes removed.
        """
        cursor = Cursor(inner)
        out: List[str] = [cursor.take_while(is_whitespace)]
        out.append(cursor.take_while(is_not_whitespace))

        while not cursor.at_end:
            out.append(cursor.take_while(is_whitespace))
            if cursor.at_end:
                break

            name = cursor.take_while(_is_name_char)
            name_at_end = cursor.at_end
            gap = cursor.take_while(is_whitespace)

            if cursor.peek() == "=":
                cursor.advance()
                kept = self._valued_attribute(name, cursor)
                if kept is None:
                    self.dropped += 1
                    logger.debug("Dropped attribute %r", name)
                else:
                    out.append(kept)
                continue

            # A trailing "/" is the self-closing marker, not an attribute.
            if name in self.allowed or (name == "/" and name_at_end):
                out.append(name)
            else:
                self.dropped += 1
                logger.debug("Dropped attribute %r", name)
            out.append(gap)

        return "".join(out)

    def _valued_attribute(self, name: str, cursor: Cursor) -> Optional[str]:
        cursor.take_while(is_whitespace)
        quote = cursor.peek() if cursor.peek() in QUOTES else ""
        if quote:
            cursor.advance()
            value = cursor.read_until(quote)
            if cursor.advance() != quote:
                return None
        else:
            value = cursor.take_while(is_not_whitespace)
            if UNSAFE_UNQUOTED.intersection(value):
                return None

        if name not in self.allowed:
            return None
        if not self.policy.allow_querystring:
            value = strip_querystring(value)
        if not self.policy.allow_javascript_prefix and has_javascript_prefix(value):
            return None
        return f"{name}={quote}{value}{quote}"


def sanitize_tag_content(
    inner: str, allowed: AbstractSet[str], policy: PolicyFlags
) -> Tuple[str, int]:
    """Sanitize one tag's inner content.

    Args:
        inner: Tag content between ``<`` and ``>``.
        allowed: Attribute names permitted on this tag.
        policy: Value policies for this call.

    Returns:
        Tuple of (sanitized content, number of attributes dropped).
    """
    sanitizer = AttributeSanitizer(allowed, policy)
    return sanitizer.sanitize(inner), sanitizer.dropped
