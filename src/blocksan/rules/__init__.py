"""Rule types and helpers shared by the composer and the tree sanitizer."""
from __future__ import annotations

from blocksan.rules.types import (
    LINE_BREAK_TAGS,
    AttributeRule,
    ElementRule,
    FieldRules,
    RuleSet,
    allow_line_breaks,
    is_rule,
    merge_rules,
)

__all__ = [
    "LINE_BREAK_TAGS",
    "AttributeRule",
    "ElementRule",
    "FieldRules",
    "RuleSet",
    "allow_line_breaks",
    "is_rule",
    "merge_rules",
]
