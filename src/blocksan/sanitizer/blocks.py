"""Batch sanitization of saved blocks.

Usage
-----
::

    from blocksan.sanitizer import BlockSanitizer
    from blocksan.tools.builtin import default_registry

    sanitizer = BlockSanitizer(default_registry())
    blocks = sanitizer.sanitize_blocks([
        {"tool": "paragraph", "data": {"text": "<script>x()</script>Hi <b>there</b>"}},
    ])
    blocks[0]["data"]["text"]
    'Hi <b>there</b>'
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from blocksan.composer.composer import RuleComposer, ToolProvider
from blocksan.html.cleaner import CleanHTML
from blocksan.rules.types import RuleSet
from blocksan.sanitizer.tree import TreeSanitizer

logger = logging.getLogger(__name__)

Block = MutableMapping[str, Any]


class BlockSanitizer:
    """Sanitizes the data of saved blocks with each tool's composed rules.

    Parameters
    ----------
    registry:
        The tool registry that declares rules and settings.
    cleaner:
        Optional cleaning primitive ``(text, rules) -> str``; defaults to
        the bleach-backed ``HtmlCleaner``.
    """

    def __init__(self, registry: ToolProvider, cleaner: CleanHTML | None = None) -> None:
        self._composer = RuleComposer(registry)
        self._tree = TreeSanitizer(cleaner)

    @property
    def composer(self) -> RuleComposer:
        return self._composer

    def sanitize_blocks(self, blocks: Iterable[Block]) -> list[Block]:
        """Sanitize every block's ``data`` in place and return the blocks.

        Each block is a mapping with a ``tool`` name and its ``data``.
        Blocks without ``data``, and blocks whose tool composes to empty
        rules, are left untouched.

        Raises
        ------
        ToolNotFoundError
            If a block names an unregistered tool.
        """
        sanitized: list[Block] = []
        for block in blocks:
            tool_config = self._composer.compose_tool_config(block["tool"])
            if "data" not in block:
                logger.debug("Block of tool %r has no data; skipped", block["tool"])
            elif tool_config:
                block["data"] = self._tree.deep_sanitize(block["data"], tool_config)
            else:
                logger.debug("No sanitize rules for tool %r; block kept as is", block["tool"])
            sanitized.append(block)
        return sanitized

    def compose_tool_config(self, tool_name: str) -> Mapping[str, Any]:
        """Return the composed rules of ``tool_name``."""
        return self._composer.compose_tool_config(tool_name)

    def deep_sanitize(self, value: Any, rules: Any) -> Any:
        """Sanitize ``value`` with explicit ``rules``, bypassing composition."""
        return self._tree.deep_sanitize(value, rules)

    def clean(self, text: str, rules: RuleSet | None = None) -> str:
        """Clean one string; without ``rules`` all markup is stripped."""
        return self._tree.clean(text, rules)
