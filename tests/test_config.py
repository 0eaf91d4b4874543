from __future__ import annotations

import json
from pathlib import Path

import pytest

from htmlcleaner.config.allowlist import (
    load_allow_list_file,
    merge_rules,
    parse_allow_rule,
    parse_allow_rules,
)
from htmlcleaner.config.settings import Settings

ENV_VARS = (
    "HTMLCLEANER_LOG_LEVEL",
    "HTMLCLEANER_ALLOWLIST",
    "HTMLCLEANER_ALLOW_JAVASCRIPT_PREFIX",
    "HTMLCLEANER_ALLOW_QUERYSTRING",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_parse_allow_rule() -> None:
    assert parse_allow_rule("a:href, title") == ("a", ["href", "title"])
    assert parse_allow_rule("br") == ("br", [])
    assert parse_allow_rule(" p : ") == ("p", [])


def test_parse_allow_rule_requires_tag() -> None:
    with pytest.raises(ValueError, match="missing tag name"):
        parse_allow_rule(":href")


def test_load_allow_list_file(tmp_path: Path) -> None:
    path = tmp_path / "allow.json"
    path.write_text(
        json.dumps({"tags": {"a": ["href"], "br": []}, "allow_querystring": True}),
        encoding="utf-8",
    )

    config = load_allow_list_file(path)

    assert config.allow_list.attributes_for("a") == frozenset({"href"})
    assert config.allow_list.is_allowed("br")
    assert config.policy.allow_querystring is True
    assert config.policy.allow_javascript_prefix is False


def test_load_allow_list_file_rejects_bad_input(tmp_path: Path) -> None:
    not_json = tmp_path / "broken.json"
    not_json.write_text("{tags:", encoding="utf-8")
    with pytest.raises(ValueError):
        load_allow_list_file(not_json)

    blank_tag = tmp_path / "blank.json"
    blank_tag.write_text(json.dumps({"tags": {" ": []}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_allow_list_file(blank_tag)

    with pytest.raises(OSError):
        load_allow_list_file(tmp_path / "missing.json")


def test_merge_rules_replaces_existing_tag(tmp_path: Path) -> None:
    path = tmp_path / "allow.json"
    path.write_text(json.dumps({"tags": {"a": ["href"], "p": []}}), encoding="utf-8")

    config = merge_rules(load_allow_list_file(path), parse_allow_rules(["a:title"]))

    assert config.allow_list.attributes_for("a") == frozenset({"title"})
    assert config.allow_list.is_allowed("p")


def test_settings_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings()
    assert settings.log_level == "WARNING"
    assert settings.allowlist_path is None
    assert settings.allow_javascript_prefix is False
    assert settings.allow_querystring is False


def test_settings_from_environment(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("HTMLCLEANER_LOG_LEVEL", "debug")
    clean_env.setenv("HTMLCLEANER_ALLOWLIST", str(tmp_path / "allow.json"))
    clean_env.setenv("HTMLCLEANER_ALLOW_JAVASCRIPT_PREFIX", "yes")
    clean_env.setenv("HTMLCLEANER_ALLOW_QUERYSTRING", "0")

    settings = Settings()

    assert settings.log_level == "DEBUG"
    assert settings.allowlist_path == tmp_path / "allow.json"
    assert settings.allow_javascript_prefix is True
    assert settings.allow_querystring is False
