"""Rule composition: the effective sanitize rules of a tool.

A tool's effective rules combine, per data field, the tool's own declared
rules with the rules of the inline tools it enables. Declared keys win;
keys present on only one side pass through. The merge is one level deep:
a declared tag rule replaces the inline tag rule wholesale.

Usage
-----
::

    from blocksan.composer import RuleComposer
    from blocksan.tools.builtin import default_registry

    composer = RuleComposer(default_registry())
    rules = composer.compose_tool_config("paragraph")
    rules["text"]["b"]
    {}

Both caches assume the registry does not change while the composer is in
use; ``invalidate`` drops them after it does. Cached results are
read-only views, so callers cannot alter what later lookups return.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

from blocksan.rules.types import allow_line_breaks, merge_rules
from blocksan.tools.base import ToolSettings
from blocksan.tools.registry import ToolNotFoundError

logger = logging.getLogger(__name__)


class ToolProvider(Protocol):
    """What the composer needs from a tool registry."""

    SANITIZE_CONFIG: str

    @property
    def name(self) -> str: ...

    @property
    def inline(self) -> Mapping[str, type]: ...

    def get(self, name: str) -> type: ...

    def get_tool_settings(self, name: str) -> ToolSettings: ...


class RuleComposer:
    """Computes and memoizes the effective sanitize rules per tool.

    Parameters
    ----------
    registry:
        The tool registry to read declared rules and settings from.
    """

    def __init__(self, registry: ToolProvider) -> None:
        self._registry = registry
        self._config_cache: dict[str, Mapping[str, Any]] = {}
        self._inline_tools_config_cache: Mapping[str, Any] | None = None

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compose_tool_config(self, tool_name: str) -> Mapping[str, Any]:
        """Return the effective rules of ``tool_name``.

        A tool without declared rules, or with an empty mapping, gets its
        inline rule set, which then applies to every field. Otherwise each
        declared field maps to its own rules: mapping rules are merged over
        the inline rule set, any other value is kept as declared.

        Raises
        ------
        ToolNotFoundError
            If ``tool_name`` or one of its enabled inline tools is not
            registered.
        """
        if tool_name in self._config_cache:
            return self._config_cache[tool_name]

        tool_class = self._registry.get(tool_name)
        base_config = self.get_inline_tools_config(tool_name)
        tool_rules = getattr(tool_class, self._registry.SANITIZE_CONFIG, None)

        composed: Mapping[str, Any]
        if not isinstance(tool_rules, Mapping) or not tool_rules:
            composed = MappingProxyType(base_config)
        else:
            field_config: dict[str, Any] = {}
            for field_name, rule in tool_rules.items():
                if isinstance(rule, Mapping):
                    field_config[field_name] = MappingProxyType(
                        allow_line_breaks(merge_rules(base_config, rule))
                    )
                else:
                    field_config[field_name] = rule
            composed = MappingProxyType(field_config)

        self._config_cache[tool_name] = composed
        logger.debug("Composed sanitize config for tool %r: %r", tool_name, composed)
        return composed

    def get_inline_tools_config(self, tool_name: str) -> dict[str, Any]:
        """Return the rules of the inline tools ``tool_name`` enables.

        ``inline_toolbar=True`` yields the rules of every inline tool; a
        sequence of names yields the union of those tools' rules in order,
        later names winning. Line-break tags are always allowed.

        Raises
        ------
        ToolNotFoundError
            If an enabled inline tool is not registered.
        """
        settings = self._registry.get_tool_settings(tool_name)
        enabled = settings.inline_toolbar

        if enabled is True:
            config = dict(self.get_all_inline_tools_config())
        else:
            config = {}
            inline_tools = self._registry.inline
            for inline_name in enabled or ():
                if inline_name not in inline_tools:
                    raise ToolNotFoundError(inline_name, self._registry.name)
                config.update(self._declared_rules(inline_tools[inline_name]))

        return allow_line_breaks(config)

    def get_all_inline_tools_config(self) -> Mapping[str, Any]:
        """Return the union of every inline tool's rules.

        Computed once per composer; later registrations win on the same
        tag.
        """
        if self._inline_tools_config_cache is not None:
            return self._inline_tools_config_cache

        config: dict[str, Any] = {}
        for inline_tool in self._registry.inline.values():
            config.update(self._declared_rules(inline_tool))

        self._inline_tools_config_cache = MappingProxyType(config)
        logger.debug("Cached rules of %d inline tool(s)", len(self._registry.inline))
        return self._inline_tools_config_cache

    # ------------------------------------------------------------------
    # Cache control
    # ------------------------------------------------------------------

    def invalidate(self, tool_name: str | None = None) -> None:
        """Drop cached compositions.

        With ``tool_name`` only that tool's entry is dropped. Without it,
        both the per-tool cache and the inline aggregate are cleared; do
        this after changing inline tools.
        """
        if tool_name is not None:
            self._config_cache.pop(tool_name, None)
            logger.debug("Invalidated sanitize config for tool %r", tool_name)
            return
        self._config_cache.clear()
        self._inline_tools_config_cache = None
        logger.debug("Invalidated all sanitize configs")

    @property
    def cached_tools(self) -> list[str]:
        """Names of the tools with a cached composition, sorted."""
        return sorted(self._config_cache)

    def _declared_rules(self, tool_class: type) -> Mapping[str, Any]:
        rules = getattr(tool_class, self._registry.SANITIZE_CONFIG, None)
        return merge_rules(rules) if isinstance(rules, Mapping) else {}
