"""Tag grammar parsing tests."""

from __future__ import annotations

import logging

import pytest
from suite_digest.result_ingestion.tag_grammar import (
    NO_TAGS_PLACEHOLDER,
    NOT_AVAILABLE,
    MultiTagValue,
    ScalarTagValue,
    parse_tags,
    resolve_tags,
)


def test_parses_local_realm_and_accumulates_payment_methods() -> None:
    metadata = parse_tags(
        ["@local:fr", "@realm:eu", "@payment_method:cb", "@payment_method:paypal"]
    )

    assert metadata.local == "fr"
    assert metadata.realm == "eu"
    assert metadata.custom_tags == {"payment_method": MultiTagValue(("cb", "paypal"))}
    assert metadata.payment_methods == ("cb", "paypal")
    assert metadata.custom_tags["payment_method"].display() == "cb, paypal"


def test_locale_is_an_alias_for_local() -> None:
    metadata = parse_tags(["@locale:de", "@realm:emea"])

    assert metadata.local == "de"


def test_scalar_custom_tags_keep_the_last_value() -> None:
    metadata = parse_tags(["@local:fr", "@realm:eu", "@team:alpha", "@team:beta"])

    assert metadata.custom_tags == {"team": ScalarTagValue("beta")}
    assert metadata.payment_methods == ()


def test_custom_tag_keys_keep_first_seen_order() -> None:
    metadata = parse_tags(
        ["@local:fr", "@realm:eu", "@zone:a", "@payment_method:cb", "@browser:chrome", "@zone:b"]
    )

    assert list(metadata.custom_tags) == ["zone", "payment_method", "browser"]


def test_value_is_split_on_the_first_colon_only() -> None:
    metadata = parse_tags(["@local:fr", "@realm:eu", "@url:https://example.com"])

    assert metadata.custom_tags["url"] == ScalarTagValue("https://example.com")


def test_malformed_tags_are_ignored() -> None:
    metadata = parse_tags(
        ["@local:fr", "@realm:eu", "smoke", "@orphan", "@:value", "@empty:", NO_TAGS_PLACEHOLDER]
    )

    assert metadata.custom_tags == {}
    assert metadata.local == "fr"
    assert metadata.realm == "eu"


def test_missing_local_and_realm_fall_back_and_log_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="suite_digest.result_ingestion.tag_grammar"):
        metadata = parse_tags(["@team:alpha"], test_title="checkout works")

    assert metadata.local == NOT_AVAILABLE
    assert metadata.realm == NOT_AVAILABLE
    assert "Missing tag data for test 'checkout works'" in caplog.text
    assert "team" in caplog.text


def test_complete_tags_do_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="suite_digest.result_ingestion.tag_grammar"):
        parse_tags(["@local:fr", "@realm:eu"])

    assert caplog.records == []


def test_resolve_tags_substitutes_placeholder_for_empty_list() -> None:
    assert resolve_tags([]) == (NO_TAGS_PLACEHOLDER,)
    assert resolve_tags(["@local:fr"]) == ("@local:fr",)


def test_custom_tags_cannot_be_mutated() -> None:
    metadata = parse_tags(["@local:fr", "@realm:eu", "@team:alpha"])

    with pytest.raises(TypeError):
        metadata.custom_tags["team"] = ScalarTagValue("beta")  # type: ignore[index]

    assert metadata.custom_tags["team"] == ScalarTagValue("alpha")
