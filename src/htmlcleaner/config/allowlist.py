"""Allow-list loading from command-line rules and JSON files."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from ..domain.models import AllowList, CleanerConfig, PolicyFlags

logger = logging.getLogger(__name__)


class AllowListFile(BaseModel):
    """On-disk allow-list format.

    Example:
        ```json
        {
          "tags": {"a": ["href", "title"], "br": []},
          "allow_javascript_prefix": false,
          "allow_querystring": true
        }
        ```
    """

    tags: Dict[str, List[str]] = Field(default_factory=dict)
    allow_javascript_prefix: bool = False
    allow_querystring: bool = False

    @field_validator("tags")
    @classmethod
    def tag_names_not_blank(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Reject empty tag names, which would never match a real tag."""
        for tag in v:
            if not tag.strip():
                raise ValueError("tag names must not be empty")
        return v

    def to_config(self) -> CleanerConfig:
        return CleanerConfig(
            allow_list=AllowList(tags=self.tags),
            policy=PolicyFlags(
                allow_javascript_prefix=self.allow_javascript_prefix,
                allow_querystring=self.allow_querystring,
            ),
        )


def parse_allow_rule(rule: str) -> Tuple[str, List[str]]:
    """Parse a ``tag`` or ``tag:attr,attr`` rule.

    Args:
        rule: Rule text, e.g. ``"a:href,title"`` or ``"br"``.

    Returns:
        Tuple of (tag name, attribute names).

    Raises:
        ValueError: If the tag name is missing.
    """
    tag, _, attrs = rule.partition(":")
    tag = tag.strip()
    if not tag:
        raise ValueError(f"Invalid allow rule {rule!r}: missing tag name")
    attributes = [a.strip() for a in attrs.split(",") if a.strip()]
    return tag, attributes


def parse_allow_rules(rules: Iterable[str]) -> List[Tuple[str, List[str]]]:
    return [parse_allow_rule(rule) for rule in rules]


def load_allow_list_file(path: Union[str, Path]) -> CleanerConfig:
    """Load a JSON allow-list file.

    Args:
        path: Path to the JSON file.

    Returns:
        CleanerConfig built from the file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or does not match the
            expected schema (pydantic's ValidationError is a ValueError).
    """
    path = Path(path)
    logger.debug("Loading allow-list from %s", path)
    data = json.loads(path.read_text(encoding="utf-8"))
    return AllowListFile.model_validate(data).to_config()


def merge_rules(config: CleanerConfig, rules: Iterable[Tuple[str, List[str]]]) -> CleanerConfig:
    """Add rules on top of an existing configuration.

    A rule for a tag already in ``config`` replaces its attributes.
    """
    pairs = list(config.allow_list.tags.items()) + list(rules)
    return CleanerConfig(allow_list=AllowList.from_pairs(pairs), policy=config.policy)
