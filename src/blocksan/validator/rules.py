"""Individual checks run against a ``ToolRegistry``.

Each check is a callable that accepts a registry and returns a list of
``Diagnostic`` objects. Checks are composed into the ``Validator`` class
which runs them all and aggregates results.

Check codes use the ``BSN`` prefix followed by a three-digit number:

    BSN001  inline_toolbar names an unregistered tool
    BSN002  inline_toolbar names a tool that is not an inline tool
    BSN003  Declared field rule is not a rule
    BSN004  Rule disallows a line-break tag that is always allowed
    BSN005  Inline tool declares no rules
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from blocksan.rules.types import LINE_BREAK_TAGS, is_rule
from blocksan.tools.base import InlineTool
from blocksan.tools.registry import ToolRegistry
from blocksan.validator.diagnostics import Diagnostic, DiagnosticSeverity

Rule = Callable[[ToolRegistry], list[Diagnostic]]


def _declared(registry: ToolRegistry, cls: type) -> Any:
    return getattr(cls, registry.SANITIZE_CONFIG, None)


def _make(
    code: str,
    severity: DiagnosticSeverity,
    message: str,
    tool: str,
    location: str = "",
    suggestion: str | None = None,
    rule: str = "",
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        tool=tool,
        location=location,
        suggestion=suggestion,
        rule=rule,
    )


def _toolbar_names(registry: ToolRegistry, name: str) -> tuple[str, ...]:
    enabled = registry.get_tool_settings(name).inline_toolbar
    return () if isinstance(enabled, bool) else tuple(enabled)


# ---------------------------------------------------------------------------
# BSN001: unknown inline tools
# ---------------------------------------------------------------------------

def rule_unknown_inline_tools(registry: ToolRegistry) -> list[Diagnostic]:
    """BSN001: Every tool named in an inline toolbar must be registered."""
    diagnostics: list[Diagnostic] = []
    for name in registry.available:
        for inline_name in _toolbar_names(registry, name):
            if inline_name not in registry:
                diagnostics.append(_make(
                    "BSN001",
                    DiagnosticSeverity.ERROR,
                    f"Inline toolbar references unregistered tool {inline_name!r}",
                    name,
                    suggestion=f"Register {inline_name!r} or remove it from the toolbar",
                    rule="unknown_inline_tools",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# BSN002: toolbar entries that are not inline tools
# ---------------------------------------------------------------------------

def rule_toolbar_not_inline(registry: ToolRegistry) -> list[Diagnostic]:
    """BSN002: Inline toolbars may only name inline tools."""
    diagnostics: list[Diagnostic] = []
    inline = registry.inline
    for name in registry.available:
        for inline_name in _toolbar_names(registry, name):
            if inline_name in registry and inline_name not in inline:
                diagnostics.append(_make(
                    "BSN002",
                    DiagnosticSeverity.ERROR,
                    f"Inline toolbar references {inline_name!r}, which is not an inline tool",
                    name,
                    rule="toolbar_not_inline",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# BSN003: declared values that are not rules
# ---------------------------------------------------------------------------

def rule_non_rule_fields(registry: ToolRegistry) -> list[Diagnostic]:
    """BSN003: Block tool field rules should be mappings, booleans or callables."""
    diagnostics: list[Diagnostic] = []
    inline = registry.inline
    for name, cls in registry.available.items():
        declared = _declared(registry, cls)
        if name in inline or not isinstance(declared, Mapping):
            continue
        for field_name, value in declared.items():
            if not is_rule(value):
                diagnostics.append(_make(
                    "BSN003",
                    DiagnosticSeverity.WARNING,
                    f"Rule for field {field_name!r} is {value!r}, not a rule; "
                    "the tool's inline rules will apply to it",
                    name,
                    location=str(field_name),
                    suggestion="Use a tag mapping, True or False",
                    rule="non_rule_fields",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# BSN004: disallowed line breaks
# ---------------------------------------------------------------------------

def _disallowed_breaks(rules: Mapping[str, Any]) -> list[str]:
    return [tag for tag in LINE_BREAK_TAGS if tag in rules and rules[tag] is False]


def rule_line_breaks_forced(registry: ToolRegistry) -> list[Diagnostic]:
    """BSN004: ``br`` and ``wbr`` are always allowed; disallowing them has no effect."""
    diagnostics: list[Diagnostic] = []
    inline = registry.inline
    for name, cls in registry.available.items():
        declared = _declared(registry, cls)
        if not isinstance(declared, Mapping):
            continue
        if name in inline:
            targets = [("", declared)]
        else:
            targets = [(f, r) for f, r in declared.items() if isinstance(r, Mapping)]
        for location, rules in targets:
            for tag in _disallowed_breaks(rules):
                diagnostics.append(_make(
                    "BSN004",
                    DiagnosticSeverity.INFORMATION,
                    f"Tag {tag!r} is disallowed here but line breaks are always allowed",
                    name,
                    location=str(location),
                    rule="line_breaks_forced",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# BSN005: inline tools without rules
# ---------------------------------------------------------------------------

def rule_inline_without_rules(registry: ToolRegistry) -> list[Diagnostic]:
    """BSN005: An inline tool with no rules lets none of its markup through."""
    diagnostics: list[Diagnostic] = []
    for name, cls in registry.available.items():
        if not issubclass(cls, InlineTool):
            continue
        declared = _declared(registry, cls)
        if not isinstance(declared, Mapping) or not declared:
            diagnostics.append(_make(
                "BSN005",
                DiagnosticSeverity.WARNING,
                "Inline tool declares no sanitize rules; its markup will be stripped",
                name,
                suggestion="Declare the tags the tool produces, e.g. {'b': True}",
                rule="inline_without_rules",
            ))
    return diagnostics


DEFAULT_RULES: list[Rule] = [
    rule_unknown_inline_tools,
    rule_toolbar_not_inline,
    rule_non_rule_fields,
    rule_line_breaks_forced,
    rule_inline_without_rules,
]
