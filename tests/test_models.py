from __future__ import annotations

import pytest
from pydantic import ValidationError

from htmlcleaner.domain.models import AllowList, CleanerConfig, CleanResult, PolicyFlags


def test_allow_list_from_pairs_last_duplicate_wins() -> None:
    allow_list = AllowList.from_pairs([("a", ["href"]), ("a", ["title"])])
    assert allow_list.attributes_for("a") == frozenset({"title"})


def test_allow_list_single_attribute_string() -> None:
    allow_list = AllowList.from_pairs([("a", "href")])
    assert allow_list.attributes_for("a") == frozenset({"href"})


def test_allow_list_lookup_is_case_sensitive() -> None:
    allow_list = AllowList(tags={"b": []})
    assert allow_list.is_allowed("b")
    assert not allow_list.is_allowed("B")
    assert allow_list.attributes_for("b") == frozenset()
    assert allow_list.attributes_for("i") == frozenset()


def test_policy_defaults_are_conservative() -> None:
    policy = PolicyFlags()
    assert policy.allow_javascript_prefix is False
    assert policy.allow_querystring is False
    assert CleanerConfig().allow_list.tags == {}


def test_models_are_immutable() -> None:
    policy = PolicyFlags()
    with pytest.raises(ValidationError):
        policy.allow_querystring = True  # type: ignore[misc]


def test_clean_result_elapsed_never_negative() -> None:
    assert CleanResult(output="", elapsed=-0.5).elapsed == 0.0


def test_allow_list_tags_are_read_only() -> None:
    config = CleanerConfig(allow_list=AllowList.from_pairs([("b", [])]))
    with pytest.raises(TypeError):
        config.allow_list.tags["script"] = frozenset()  # type: ignore[index]
    with pytest.raises(TypeError):
        CleanerConfig().allow_list.tags["script"] = frozenset()  # type: ignore[index]
    assert not config.allow_list.is_allowed("script")
