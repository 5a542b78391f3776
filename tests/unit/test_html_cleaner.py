"""Unit tests for blocksan.html.cleaner — the bleach-backed cleaning
primitive and its rule translation.
"""
from __future__ import annotations

import pytest

from blocksan.html import CleanerOptions, HtmlCleaner, default_cleaner


@pytest.fixture()
def cleaner() -> HtmlCleaner:
    return HtmlCleaner()


# ===========================================================================
# Tags
# ===========================================================================


class TestTags:
    def test_empty_rules_strip_all_markup(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<p>Hello <b>World</b></p>", {}) == "Hello World"

    def test_none_rules_strip_all_markup(self, cleaner: HtmlCleaner) -> None:
        assert cleaner.clean("<i>x</i>") == "x"

    def test_true_keeps_tag_without_attributes(self, cleaner: HtmlCleaner) -> None:
        assert cleaner('<b class="x" id="y">t</b>', {"b": True}) == "<b>t</b>"

    def test_false_strips_tag_keeps_text(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<b>t</b><i>u</i>", {"b": False, "i": True}) == "t<i>u</i>"

    def test_empty_mapping_keeps_tag(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<b>t</b>", {"b": {}}) == "<b>t</b>"

    def test_line_breaks(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("a<br>b", {"br": True}) == "a<br>b"

    def test_plain_text_unchanged(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("just words", {"b": True}) == "just words"

    def test_comments_stripped(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("a<!-- note -->b", {}) == "ab"

    def test_stripped_block_tags_leave_no_newline(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<div>x</div><div>y</div>", {}) == "xy"

    def test_trailing_block_tag_leaves_no_newline(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("two<br>three<p>", {"br": True}) == "two<br>three"

    def test_text_newlines_kept(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<p>a\nb</p><p>c</p>", {}) == "a\nbc"


# ===========================================================================
# Executable content
# ===========================================================================


class TestScriptAndStyle:
    def test_script_and_body_removed(self, cleaner: HtmlCleaner) -> None:
        result = cleaner("<script>bad()</script>Hello<b>World</b>", {"b": True})
        assert result == "Hello<b>World</b>"

    def test_style_and_body_removed(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<style>p { color: red }</style>text", {}) == "text"

    def test_uppercase_script_removed(self, cleaner: HtmlCleaner) -> None:
        assert cleaner('<SCRIPT type="x">bad()</SCRIPT>ok', {}) == "ok"

    def test_unclosed_script_removes_rest(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("ok<script>bad()", {}) == "ok"

    @pytest.mark.parametrize("tag", ["textarea", "option"])
    def test_form_control_bodies_removed(self, cleaner: HtmlCleaner, tag: str) -> None:
        assert cleaner(f"a<{tag}>hidden</{tag}>b", {}) == "ab"

    def test_allowed_form_control_kept(self, cleaner: HtmlCleaner) -> None:
        assert cleaner("<option>o</option>", {"option": True}) == "<option>o</option>"

    def test_drop_content_tags_configurable(self) -> None:
        cleaner = HtmlCleaner(CleanerOptions(drop_content_tags=()))
        assert cleaner("<script>bad()</script>ok", {}) == "bad()ok"


# ===========================================================================
# Attributes
# ===========================================================================


class TestAttributes:
    def test_allowed_attribute_kept_others_dropped(self, cleaner: HtmlCleaner) -> None:
        result = cleaner(
            '<a href="https://example.com" onclick="x()">link</a>', {"a": {"href": True}}
        )
        assert result == '<a href="https://example.com">link</a>'

    def test_false_attribute_dropped(self, cleaner: HtmlCleaner) -> None:
        assert cleaner('<a href="https://e.com">l</a>', {"a": {"href": False}}) == "<a>l</a>"

    def test_javascript_urls_dropped(self, cleaner: HtmlCleaner) -> None:
        result = cleaner('<a href="javascript:alert(1)">l</a>', {"a": {"href": True}})
        assert "javascript" not in result
        assert result == "<a>l</a>"

    def test_protocols_configurable(self) -> None:
        cleaner = HtmlCleaner(CleanerOptions(protocols=frozenset({"https"})))
        assert cleaner('<a href="mailto:me@e.com">m</a>', {"a": {"href": True}}) == "<a>m</a>"

    def test_predicate_attribute_rule(self, cleaner: HtmlCleaner) -> None:
        rules = {"a": {"href": lambda value: value.startswith("https://")}}
        assert cleaner('<a href="http://e.com">l</a>', rules) == "<a>l</a>"
        assert cleaner('<a href="https://e.com">l</a>', rules) == '<a href="https://e.com">l</a>'

    def test_callable_tag_rule(self, cleaner: HtmlCleaner) -> None:
        rules = {"span": lambda name, value: name == "class"}
        assert cleaner('<span class="c" id="i">t</span>', rules) == '<span class="c">t</span>'

    def test_fixed_value_forced(self, cleaner: HtmlCleaner) -> None:
        rules = {"a": {"href": True, "rel": "nofollow", "target": "_blank"}}
        result = cleaner('<a href="https://e.com" rel="opener">l</a>', rules)
        assert result.startswith('<a href="https://e.com"')
        assert 'rel="nofollow"' in result
        assert 'target="_blank"' in result
        assert "opener" not in result

    def test_fixed_value_added_when_missing(self, cleaner: HtmlCleaner) -> None:
        rules = {"mark": {"class": "cdx-marker"}}
        assert cleaner("<mark>m</mark>", rules) == '<mark class="cdx-marker">m</mark>'

    def test_fixed_value_not_applied_to_other_tags(self, cleaner: HtmlCleaner) -> None:
        rules = {"mark": {"class": "cdx-marker"}, "b": True}
        assert cleaner("<b>b</b>", rules) == "<b>b</b>"


# ===========================================================================
# default_cleaner
# ===========================================================================


class TestDefaultCleaner:
    def test_shared_instance(self) -> None:
        assert default_cleaner() is default_cleaner()

    def test_default_options(self) -> None:
        options = default_cleaner().options
        assert options.protocols == frozenset({"http", "https", "mailto"})
        assert options.strip_comments is True
        assert options.drop_content_tags == ("script", "style", "textarea", "option")
