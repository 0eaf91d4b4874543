"""Core domain models for the HTML cleaner."""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PolicyFlags(BaseModel):
    """Global value policies applied to every kept attribute in one call."""

    model_config = ConfigDict(frozen=True)

    allow_javascript_prefix: bool = False
    allow_querystring: bool = False


class AllowList(BaseModel):
    """Tags that may survive sanitization, each with its permitted attributes.

    A tag without an entry is forbidden. Lookups are case-sensitive.
    """

    model_config = ConfigDict(frozen=True)

    tags: Mapping[str, FrozenSet[str]] = Field(default_factory=dict, validate_default=True)

    @field_validator("tags", mode="before")
    @classmethod
    def attributes_as_sets(cls, v: object) -> object:
        """Accept any iterable of attribute names per tag."""
        if isinstance(v, Mapping):
            return {tag: frozenset(attrs or ()) for tag, attrs in v.items()}
        return v

    @field_validator("tags")
    @classmethod
    def read_only_tags(cls, v: Mapping[str, FrozenSet[str]]) -> Mapping[str, FrozenSet[str]]:
        """Expose the tags as a read-only view so a shared cleaner cannot change."""
        return MappingProxyType(dict(v))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Iterable[str]]]) -> "AllowList":
        """Build an allow-list from ordered (tag, attributes) pairs.

        A tag listed twice keeps the attributes of its last pair.
        """
        tags: Dict[str, FrozenSet[str]] = {}
        for tag, attributes in pairs:
            if isinstance(attributes, str):
                attributes = [attributes]
            tags[tag] = frozenset(attributes)
        return cls(tags=tags)

    def is_allowed(self, tag: str) -> bool:
        return tag in self.tags

    def attributes_for(self, tag: str) -> FrozenSet[str]:
        return self.tags.get(tag, frozenset())


class CleanerConfig(BaseModel):
    """Complete configuration for one sanitizer."""

    model_config = ConfigDict(frozen=True)

    allow_list: AllowList = Field(default_factory=AllowList)
    policy: PolicyFlags = Field(default_factory=PolicyFlags)


class CleanStats(BaseModel):
    """Counters collected during a single sanitization pass."""

    tags_kept: int = 0
    tags_dropped: int = 0
    subtrees_removed: int = 0
    attributes_dropped: int = 0
    truncated: bool = False


class CleanResult(BaseModel):
    """Sanitized output together with the statistics of the pass."""

    output: str
    stats: CleanStats = Field(default_factory=CleanStats)
    elapsed: float = 0.0
    source_length: Optional[int] = None

    @field_validator("elapsed")
    @classmethod
    def elapsed_not_negative(cls, v: float) -> float:
        """Clock adjustments must not produce negative timings."""
        return max(0.0, v)
