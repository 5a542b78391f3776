#!/usr/bin/env python3
"""Example: custom tools — blocksan

Register your own inline and block tools, inspect the composed rules and
check the registry for mistakes.

Usage:
    python examples/02_custom_tools.py
"""
from __future__ import annotations

from blocksan import BlockSanitizer, check
from blocksan.tools import BlockTool, InlineTool, ToolRegistry, ToolSettings

registry = ToolRegistry("custom")


@registry.register("strike")
class Strike(InlineTool):
    sanitize = {"s": True}


@registry.register("underline")
class Underline(InlineTool):
    sanitize = {"u": {"class": "cdx-underline"}}


@registry.register("callout", settings=ToolSettings(inline_toolbar=("strike", "underline")))
class Callout(BlockTool):
    sanitize = {
        "title": False,
        "body": {"br": True},
        "emoji": True,
    }


def main() -> None:
    sanitizer = BlockSanitizer(registry)
    print("Composed rules:", sanitizer.compose_tool_config("callout"))

    blocks = sanitizer.sanitize_blocks([
        {
            "tool": "callout",
            "data": {
                "title": "<b>Heads up</b>",
                "body": "Old <s>price</s> <u>new price</u><img src=x onerror=alert(1)>",
                "emoji": "<span>!</span>",
            },
        },
    ])
    print("Sanitized:", blocks[0]["data"])

    for diagnostic in check(registry):
        print(diagnostic)


if __name__ == "__main__":
    main()
