"""Registry checks for declared sanitize rules."""
from __future__ import annotations

from blocksan.validator.diagnostics import Diagnostic, DiagnosticSeverity
from blocksan.validator.validator import Validator, validate

__all__ = ["Diagnostic", "DiagnosticSeverity", "Validator", "validate"]
