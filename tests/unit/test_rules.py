"""Unit tests for blocksan.rules.types — is_rule, merge_rules,
allow_line_breaks.
"""
from __future__ import annotations

import pytest

from blocksan.rules import LINE_BREAK_TAGS, allow_line_breaks, is_rule, merge_rules


# ===========================================================================
# is_rule
# ===========================================================================


class TestIsRule:
    @pytest.mark.parametrize(
        "value",
        [{"a": True}, {}, True, False, lambda value: True, len],
    )
    def test_rule_shaped_values(self, value: object) -> None:
        assert is_rule(value) is True

    @pytest.mark.parametrize("value", [None, 0, 1, 2.5, "b", ["b"]])
    def test_plain_data_is_not_a_rule(self, value: object) -> None:
        assert is_rule(value) is False


# ===========================================================================
# merge_rules
# ===========================================================================


class TestMergeRules:
    def test_later_source_wins(self) -> None:
        merged = merge_rules({"a": {"href": True}, "b": True}, {"a": True})
        assert merged == {"a": True, "b": True}

    def test_nested_values_are_replaced_not_merged(self) -> None:
        merged = merge_rules({"a": {"href": True}}, {"a": {"title": True}})
        assert merged == {"a": {"title": True}}

    def test_none_sources_are_skipped(self) -> None:
        assert merge_rules(None, {"b": True}, None) == {"b": True}

    def test_returns_new_dict(self) -> None:
        source = {"b": True}
        merged = merge_rules(source)
        merged["i"] = True
        assert source == {"b": True}

    def test_no_sources_returns_empty(self) -> None:
        assert merge_rules() == {}


# ===========================================================================
# allow_line_breaks
# ===========================================================================


class TestAllowLineBreaks:
    def test_line_break_tags(self) -> None:
        assert LINE_BREAK_TAGS == ("br", "wbr")

    def test_adds_missing_tags(self) -> None:
        assert allow_line_breaks({}) == {"br": True, "wbr": True}

    def test_overrides_disallowed_tags(self) -> None:
        rules = allow_line_breaks({"br": False, "wbr": {"class": True}, "b": True})
        assert rules == {"br": True, "wbr": True, "b": True}

    def test_mutates_and_returns_same_dict(self) -> None:
        rules: dict[str, object] = {}
        assert allow_line_breaks(rules) is rules
