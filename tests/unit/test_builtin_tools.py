"""Unit tests for blocksan.tools.builtin — built-in tools and the
default registry.
"""
from __future__ import annotations

from blocksan.composer import RuleComposer
from blocksan.tools import BlockTool, InlineTool
from blocksan.tools.builtin import BLOCK_TOOLS, INLINE_TOOLS, default_registry


class TestDefaultRegistry:
    def test_holds_every_builtin_tool(self) -> None:
        registry = default_registry()
        assert set(registry.list_tools()) == set(BLOCK_TOOLS) | set(INLINE_TOOLS)

    def test_returns_fresh_registry(self) -> None:
        assert default_registry() is not default_registry()

    def test_inline_tools_are_inline(self) -> None:
        assert all(issubclass(cls, InlineTool) for cls in INLINE_TOOLS.values())
        assert list(default_registry().inline) == list(INLINE_TOOLS)

    def test_block_tools_are_blocks(self) -> None:
        assert all(issubclass(cls, BlockTool) for cls in BLOCK_TOOLS.values())

    def test_header_toolbar_is_link_only(self) -> None:
        assert default_registry().get_tool_settings("header").inline_toolbar == ("link",)

    def test_paragraph_toolbar_enables_all(self) -> None:
        assert default_registry().get_tool_settings("paragraph").inline_toolbar is True


class TestBuiltinComposition:
    def test_paragraph_text_rules(self) -> None:
        config = RuleComposer(default_registry()).compose_tool_config("paragraph")
        assert config["text"] == {
            "b": {},
            "i": {},
            "a": {"href": True, "target": "_blank", "rel": "nofollow"},
            "code": {"class": "inline-code"},
            "mark": {"class": "cdx-marker"},
            "br": True,
            "wbr": True,
        }

    def test_header_rules(self) -> None:
        config = RuleComposer(default_registry()).compose_tool_config("header")
        assert config["level"] is False
        assert set(config["text"]) == {"a", "br", "wbr"}
