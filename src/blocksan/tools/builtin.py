"""Built-in tools.

Covers the common block tools (paragraph, header, list, quote) and the
inline formatting tools they enable. Each tool carries only the sanitize
rules the sanitizer needs.
"""
from __future__ import annotations

from blocksan.tools.base import BlockTool, InlineTool, ToolSettings
from blocksan.tools.registry import ToolRegistry


# ---------------------------------------------------------------------------
# Inline tools
# ---------------------------------------------------------------------------


class Bold(InlineTool):
    sanitize = {"b": {}}


class Italic(InlineTool):
    sanitize = {"i": {}}


class Link(InlineTool):
    sanitize = {
        "a": {
            "href": True,
            "target": "_blank",
            "rel": "nofollow",
        },
    }


class InlineCode(InlineTool):
    sanitize = {"code": {"class": "inline-code"}}


class Marker(InlineTool):
    sanitize = {"mark": {"class": "cdx-marker"}}


# ---------------------------------------------------------------------------
# Block tools
# ---------------------------------------------------------------------------


class Paragraph(BlockTool):
    sanitize = {"text": {"br": True}}


class Header(BlockTool):
    # level is a number; False strips markup from any string that lands there
    sanitize = {"level": False, "text": {}}


class List(BlockTool):
    sanitize = {"style": {}, "items": {"br": True}}


class Quote(BlockTool):
    sanitize = {
        "text": {"br": True},
        "caption": {"br": True},
        "alignment": {},
    }


INLINE_TOOLS: dict[str, type[InlineTool]] = {
    "bold": Bold,
    "italic": Italic,
    "link": Link,
    "inlineCode": InlineCode,
    "marker": Marker,
}

BLOCK_TOOLS: dict[str, type[BlockTool]] = {
    "paragraph": Paragraph,
    "header": Header,
    "list": List,
    "quote": Quote,
}


def default_registry() -> ToolRegistry:
    """Return a new registry holding every built-in tool.

    Block tools enable the full inline toolbar, except ``header`` which
    only allows links.
    """
    registry = ToolRegistry("builtin")
    for name, inline_cls in INLINE_TOOLS.items():
        registry.register_class(name, inline_cls)
    for name, block_cls in BLOCK_TOOLS.items():
        toolbar: bool | tuple[str, ...] = ("link",) if name == "header" else True
        registry.register_class(name, block_cls, ToolSettings(inline_toolbar=toolbar))
    return registry
