"""Registry checks: lint a ``ToolRegistry``'s declared sanitize rules.

The ``Validator`` runs a configurable set of checks against a registry
and returns a list of ``Diagnostic`` objects. In strict mode, warnings
are promoted to errors so that CI pipelines can enforce tighter gates.

Usage
-----
::

    from blocksan.tools.builtin import default_registry
    from blocksan.validator import Validator

    diagnostics = Validator().validate(default_registry())
    errors = [d for d in diagnostics if d.is_error]
"""
from __future__ import annotations

import logging
from dataclasses import replace

from blocksan.tools.registry import ToolRegistry
from blocksan.validator.diagnostics import Diagnostic, DiagnosticSeverity
from blocksan.validator.rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)


class Validator:
    """Checks a tool registry for rule declarations that will not work.

    Parameters
    ----------
    rules:
        The checks to run. Defaults to ``DEFAULT_RULES``.
    strict:
        When ``True``, WARNING-level diagnostics are promoted to ERROR.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        strict: bool = False,
    ) -> None:
        self._rules: list[Rule] = rules if rules is not None else list(DEFAULT_RULES)
        self._strict: bool = strict

    def validate(self, registry: ToolRegistry) -> list[Diagnostic]:
        """Run all checks against ``registry``.

        Returns
        -------
        list[Diagnostic]
            All findings, sorted by tool then code.
        """
        all_diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                all_diagnostics.extend(rule(registry))
            except Exception as exc:  # noqa: BLE001
                logger.exception("Check %r failed", rule.__name__)
                all_diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        code="BSN999",
                        message=f"Internal error in check {rule.__name__!r}: {exc}",
                        tool=registry.name,
                        suggestion="Please report this as a bug",
                        rule=rule.__name__,
                    )
                )

        if self._strict:
            all_diagnostics = [
                replace(d, severity=DiagnosticSeverity.ERROR)
                if d.severity == DiagnosticSeverity.WARNING
                else d
                for d in all_diagnostics
            ]

        all_diagnostics.sort(key=lambda d: (d.tool, d.location, d.code))
        return all_diagnostics

    def add_rule(self, rule: Rule) -> None:
        """Add a custom check to this validator instance."""
        self._rules.append(rule)

    @property
    def rule_count(self) -> int:
        """Return the number of checks currently registered."""
        return len(self._rules)


def validate(registry: ToolRegistry, strict: bool = False) -> list[Diagnostic]:
    """Convenience function: check ``registry`` with the default checks."""
    return Validator(strict=strict).validate(registry)
