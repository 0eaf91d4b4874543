"""Whitelist-based HTML sanitizer.

Anything not explicitly allowed is removed: unknown tags together with their
content, unknown attributes, ``javascript:`` values and, unless enabled,
query strings.
"""

from .application.cleaner import HTMLCleaner, sanitize
from .domain.models import AllowList, CleanerConfig, CleanResult, CleanStats, PolicyFlags
from .utils.sanitization import sanitize_html

__all__ = [
    "AllowList",
    "CleanResult",
    "CleanStats",
    "CleanerConfig",
    "HTMLCleaner",
    "PolicyFlags",
    "sanitize",
    "sanitize_html",
]
