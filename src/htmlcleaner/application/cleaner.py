"""HTML cleaning service - Core sanitization pass."""

import logging
import time
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from ..domain.models import AllowList, CleanerConfig, CleanResult, CleanStats, PolicyFlags
from ..infrastructure.scanner.attributes import sanitize_tag_content
from ..infrastructure.scanner.cursor import Cursor, read_tag

logger = logging.getLogger(__name__)

AllowedPairs = Union[Mapping[str, Iterable[str]], Iterable[Tuple[str, Iterable[str]]]]


class HTMLCleaner:
    """Whitelist-based HTML sanitizer.

    Keeps only tags present in the allow-list, with their permitted
    attributes. A disallowed tag is removed together with everything up to
    its matching close tag; a disallowed self-closing tag is removed alone.
    The service holds no state between calls and is safe to share.
    """

    def __init__(self, config: Optional[CleanerConfig] = None) -> None:
        """Initialize cleaning service.

        Args:
            config: Allow-list and value policies. Defaults to an empty
                allow-list, which strips every tag.
        """
        self.config = config if config is not None else CleanerConfig()

    def clean(self, content: str) -> str:
        """Sanitize markup.

        Args:
            content: Untrusted HTML-like text.

        Returns:
            Sanitized string. Never raises for string input.
        """
        return self.clean_with_report(content).output

    def clean_with_report(self, content: str) -> CleanResult:
        """Sanitize markup and collect statistics about what was removed.

        Args:
            content: Untrusted HTML-like text.

        Returns:
            CleanResult with output, counters and elapsed time.
        """
        start = time.time()
        if not isinstance(content, str) or not content:
            return CleanResult(output="", source_length=0)

        stats = CleanStats()
        output = self._scan(content, stats)

        return CleanResult(
            output=output,
            stats=stats,
            elapsed=time.time() - start,
            source_length=len(content),
        )

    def _scan(self, content: str, stats: CleanStats) -> str:
        """Single pass over the input, dispatching every tag found."""
        allow_list = self.config.allow_list
        policy = self.config.policy
        cursor = Cursor(content)
        out: List[str] = []

        while not cursor.at_end:
            out.append(cursor.read_until("<"))
            if cursor.at_end:
                break
            cursor.advance()

            tag = read_tag(cursor)
            if not tag.terminated:
                logger.warning(
                    "Input ended inside an unterminated tag; dropped %d trailing characters",
                    len(tag.inner) + 1,
                )
                stats.truncated = True
                break

            name = tag.name
            logger.debug("Handling tag: %s", name)

            if allow_list.is_allowed(name):
                inner, dropped = sanitize_tag_content(
                    tag.inner, allow_list.attributes_for(name), policy
                )
                out.append(f"<{inner}>")
                stats.tags_kept += 1
                stats.attributes_dropped += dropped
            elif tag.self_closing:
                stats.tags_dropped += 1
            else:
                stats.tags_dropped += 1
                if self._skip_subtree(cursor, name):
                    stats.subtrees_removed += 1
                else:
                    logger.warning(
                        "No closing tag found for <%s>; discarded the rest of the input", name
                    )
                    stats.truncated = True

        return "".join(out)

    def _skip_subtree(self, cursor: Cursor, target: str) -> bool:
        """Discard everything up to the close tag matching ``target``.

        Only tags named exactly ``target`` or ``/target`` change the nesting
        depth; all other tags and text are discarded without inspection.

        Args:
            cursor: Cursor positioned just after the disallowed opening tag.
            target: Name of the disallowed tag, without slashes.

        Returns:
            True when the matching close tag was consumed, False when the
            input ran out first.
        """
        depth = 1
        close_name = "/" + target

        while True:
            cursor.read_until("<")
            if cursor.at_end:
                return False
            cursor.advance()

            tag = read_tag(cursor)
            if not tag.terminated:
                return False

            name = tag.raw_name
            if name == close_name:
                depth -= 1
                if depth <= 0:
                    return True
            elif name == target:
                depth += 1


def sanitize(
    content: str,
    allowed: AllowedPairs = (),
    allow_javascript_prefix: bool = False,
    allow_querystring: bool = False,
) -> str:
    """Sanitize markup against an allow-list of tags and attributes.

    Args:
        content: Untrusted HTML-like text.
        allowed: ``(tag, attributes)`` pairs, or a mapping of tag to
            attributes. Tags not listed are removed with their content.
        allow_javascript_prefix: Keep attribute values starting with
            ``javascript:``. Off by default.
        allow_querystring: Keep the ``?...`` part of attribute values.
            Off by default.

    Returns:
        Sanitized string.
    """
    if isinstance(allowed, Mapping):
        allowed = allowed.items()
    config = CleanerConfig(
        allow_list=AllowList.from_pairs(allowed),
        policy=PolicyFlags(
            allow_javascript_prefix=allow_javascript_prefix,
            allow_querystring=allow_querystring,
        ),
    )
    return HTMLCleaner(config).clean(content)
