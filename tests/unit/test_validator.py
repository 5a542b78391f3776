"""Unit tests for blocksan.validator — registry checks, diagnostics and
the Validator runner.
"""
from __future__ import annotations

from blocksan.tools import BlockTool, InlineTool, ToolRegistry, ToolSettings
from blocksan.tools.builtin import default_registry
from blocksan.validator import Diagnostic, DiagnosticSeverity, Validator, validate
from blocksan.validator.rules import (
    DEFAULT_RULES,
    rule_inline_without_rules,
    rule_line_breaks_forced,
    rule_non_rule_fields,
    rule_toolbar_not_inline,
    rule_unknown_inline_tools,
)

# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def _inline(rules: object) -> type:
    return type("LocalInline", (InlineTool,), {"sanitize": rules})


def _block(rules: object) -> type:
    return type("LocalBlock", (BlockTool,), {"sanitize": rules})


def _codes(diagnostics: list[Diagnostic]) -> list[str]:
    return [d.code for d in diagnostics]


# ===========================================================================
# Diagnostic
# ===========================================================================


class TestDiagnostic:
    def test_str_with_location_and_suggestion(self) -> None:
        d = Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code="BSN003",
            message="not a rule",
            tool="header",
            location="level",
            suggestion="use False",
        )
        assert str(d) == "[BSN003] WARNING at header.level: not a rule (hint: use False)"

    def test_str_without_location(self) -> None:
        d = Diagnostic(DiagnosticSeverity.ERROR, "BSN001", "missing", "paragraph")
        assert str(d) == "[BSN001] ERROR at paragraph: missing"

    def test_is_error(self) -> None:
        assert Diagnostic(DiagnosticSeverity.ERROR, "X", "m", "t").is_error
        assert not Diagnostic(DiagnosticSeverity.HINT, "X", "m", "t").is_error


# ===========================================================================
# Individual checks
# ===========================================================================


class TestChecks:
    def test_builtin_registry_is_clean(self) -> None:
        assert validate(default_registry()) == []

    def test_unknown_inline_tool(self) -> None:
        registry = ToolRegistry()
        registry.register_class(
            "paragraph", _block({"text": {}}), ToolSettings(inline_toolbar=("ghost",))
        )
        diagnostics = rule_unknown_inline_tools(registry)
        assert _codes(diagnostics) == ["BSN001"]
        assert "ghost" in diagnostics[0].message

    def test_toolbar_names_block_tool(self) -> None:
        registry = ToolRegistry()
        registry.register_class("header", _block({"text": {}}))
        registry.register_class(
            "paragraph", _block({"text": {}}), ToolSettings(inline_toolbar=("header",))
        )
        assert _codes(rule_toolbar_not_inline(registry)) == ["BSN002"]

    def test_toolbar_true_is_not_checked_by_name(self) -> None:
        registry = ToolRegistry()
        registry.register_class("paragraph", _block({}), ToolSettings(inline_toolbar=True))
        assert rule_unknown_inline_tools(registry) == []
        assert rule_toolbar_not_inline(registry) == []

    def test_non_rule_field(self) -> None:
        registry = ToolRegistry()
        registry.register_class("header", _block({"level": 2, "text": {}, "raw": True}))
        diagnostics = rule_non_rule_fields(registry)
        assert _codes(diagnostics) == ["BSN003"]
        assert diagnostics[0].location == "level"
        assert diagnostics[0].severity is DiagnosticSeverity.WARNING

    def test_disallowed_line_break_in_block_field(self) -> None:
        registry = ToolRegistry()
        registry.register_class("paragraph", _block({"text": {"br": False, "b": True}}))
        diagnostics = rule_line_breaks_forced(registry)
        assert _codes(diagnostics) == ["BSN004"]
        assert diagnostics[0].location == "text"

    def test_disallowed_line_break_in_inline_tool(self) -> None:
        registry = ToolRegistry()
        registry.register_class("nobreak", _inline({"br": False, "wbr": False}))
        assert _codes(rule_line_breaks_forced(registry)) == ["BSN004", "BSN004"]

    def test_inline_without_rules(self) -> None:
        registry = ToolRegistry()
        registry.register_class("empty", _inline(None))
        registry.register_class("blank", _inline({}))
        registry.register_class("bold", _inline({"b": True}))
        diagnostics = rule_inline_without_rules(registry)
        assert sorted(d.tool for d in diagnostics) == ["blank", "empty"]


# ===========================================================================
# Validator
# ===========================================================================


class TestValidator:
    def test_default_rule_count(self) -> None:
        assert Validator().rule_count == len(DEFAULT_RULES)

    def test_sorted_by_tool(self) -> None:
        registry = ToolRegistry()
        registry.register_class("zeta", _inline(None))
        registry.register_class("alpha", _inline(None))
        assert [d.tool for d in Validator().validate(registry)] == ["alpha", "zeta"]

    def test_strict_promotes_warnings(self) -> None:
        registry = ToolRegistry()
        registry.register_class("empty", _inline(None))
        diagnostics = Validator(strict=True).validate(registry)
        assert [d.severity for d in diagnostics] == [DiagnosticSeverity.ERROR]

    def test_strict_keeps_information(self) -> None:
        registry = ToolRegistry()
        registry.register_class("paragraph", _block({"text": {"br": False}}))
        diagnostics = Validator(strict=True).validate(registry)
        assert [d.severity for d in diagnostics] == [DiagnosticSeverity.INFORMATION]

    def test_failing_check_reported_as_internal_error(self) -> None:
        def broken(registry: ToolRegistry) -> list[Diagnostic]:
            raise RuntimeError("boom")

        diagnostics = Validator(rules=[broken]).validate(ToolRegistry("r"))
        assert _codes(diagnostics) == ["BSN999"]
        assert "boom" in diagnostics[0].message

    def test_add_rule(self) -> None:
        validator = Validator(rules=[])
        validator.add_rule(rule_inline_without_rules)
        assert validator.rule_count == 1
