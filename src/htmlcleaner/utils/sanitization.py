"""Ready-made sanitization with a conservative allow-list."""

from ..application.cleaner import HTMLCleaner
from ..domain.models import AllowList, CleanerConfig

DEFAULT_ALLOWED = {
    "p": [],
    "br": [],
    "strong": [],
    "em": [],
    "u": [],
    "a": ["href", "title"],
    "ul": [],
    "ol": [],
    "li": [],
    "span": ["class"],
    "div": ["class"],
    "code": [],
    "pre": [],
    "blockquote": [],
}


def default_config() -> CleanerConfig:
    """Build the configuration used when no allow-list is supplied.

    Returns:
        CleanerConfig with DEFAULT_ALLOWED and both value policies off.
    """
    return CleanerConfig(allow_list=AllowList(tags=DEFAULT_ALLOWED))


def sanitize_html(content: str) -> str:
    """Sanitize HTML content to prevent XSS attacks.

    Allows a conservative set of text formatting tags. Links keep only
    ``href`` and ``title``; ``javascript:`` values and query strings are
    removed.

    Args:
        content: HTML content to sanitize.

    Returns:
        Sanitized HTML string.
    """
    if not isinstance(content, str) or not content:
        return ""
    return HTMLCleaner(default_config()).clean(content)
