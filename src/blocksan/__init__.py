"""blocksan — recursive sanitizer for block-structured editor content.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import blocksan

    # Sanitize saved blocks with the built-in tools
    blocks = blocksan.sanitize_blocks([
        {"tool": "paragraph", "data": {"text": "<script>x()</script>Hello <b>World</b>"}},
    ])
    blocks[0]["data"]["text"]
    'Hello <b>World</b>'

    # Clean one string with explicit rules
    blocksan.clean('<a href="https://example.com" onclick="x()">link</a>', {"a": {"href": True}})
    '<a href="https://example.com">link</a>'

    blocksan.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from blocksan.sanitizer.blocks import BlockSanitizer

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from blocksan.composer.composer import ToolProvider
    from blocksan.rules.types import RuleSet
    from blocksan.tools.registry import ToolRegistry
    from blocksan.validator.diagnostics import Diagnostic


def sanitize_blocks(
    blocks: Iterable[dict[str, Any]], registry: "ToolProvider | None" = None
) -> list[dict[str, Any]]:
    """Sanitize saved blocks in place.

    Parameters
    ----------
    blocks:
        Records with a ``tool`` name and the tool's ``data``.
    registry:
        Tool registry to compose rules from. Defaults to the built-in
        tools. A fresh sanitizer is built per call; keep a
        ``BlockSanitizer`` around to reuse its caches.

    Returns
    -------
    list[dict[str, Any]]
        The same records, with sanitized ``data``.

    Raises
    ------
    blocksan.tools.ToolNotFoundError
        If a block names an unregistered tool.
    """
    if registry is None:
        from blocksan.tools.builtin import default_registry

        registry = default_registry()
    return BlockSanitizer(registry).sanitize_blocks(blocks)


def clean(text: str, rules: "RuleSet | None" = None) -> str:
    """Clean one string with ``rules``; without rules all markup is stripped."""
    from blocksan.html.cleaner import default_cleaner

    return default_cleaner()(text, rules or {})


def deep_sanitize(value: Any, rules: Any) -> Any:
    """Sanitize every string leaf of ``value`` with explicit ``rules``."""
    from blocksan.sanitizer.tree import TreeSanitizer

    return TreeSanitizer().deep_sanitize(value, rules)


def check(registry: "ToolRegistry", strict: bool = False) -> list["Diagnostic"]:
    """Check a registry's declared rules for problems.

    Parameters
    ----------
    registry:
        The registry to check.
    strict:
        When ``True``, warnings are promoted to errors.
    """
    from blocksan.validator.validator import validate as _validate

    return _validate(registry, strict=strict)


__all__ = [
    "__version__",
    "BlockSanitizer",
    "sanitize_blocks",
    "clean",
    "deep_sanitize",
    "check",
]
