"""Diagnostic types for registry checks.

A ``Diagnostic`` is an annotated message attached to a tool, and
optionally to one field or tag of that tool's declared rules.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single registry check finding.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"BSN001"``.
    message:
        Human-readable description of the problem.
    tool:
        Name of the tool the finding is about.
    location:
        Field or tag inside the tool's rules, empty for the tool itself.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The check that produced this diagnostic.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    tool: str
    location: str = field(default="")
    suggestion: str | None = field(default=None)
    rule: str = field(default="")

    def __str__(self) -> str:
        where = f"{self.tool}.{self.location}" if self.location else self.tool
        prefix = f"[{self.code}] {self.severity.name}"
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix} at {where}: {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should fail the check."""
        return self.severity == DiagnosticSeverity.ERROR
