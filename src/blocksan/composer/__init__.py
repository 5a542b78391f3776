"""Per-tool sanitize rule composition."""
from __future__ import annotations

from blocksan.composer.composer import RuleComposer, ToolProvider

__all__ = ["RuleComposer", "ToolProvider"]
