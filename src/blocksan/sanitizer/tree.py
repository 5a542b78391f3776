"""Recursive sanitization of JSON-like block data.

Block data has no fixed schema. ``TreeSanitizer.deep_sanitize`` walks it
by value shape:

- lists (and tuples) are cleaned item by item with the same rules;
- mappings are cleaned field by field, each field using the rule stored
  under its name when that entry is a rule, otherwise the parent rules;
- strings are handed to the cleaning primitive;
- every other value is returned as is.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from blocksan.html.cleaner import CleanHTML, default_cleaner
from blocksan.rules.types import RuleSet, is_rule


class TreeSanitizer:
    """Applies sanitize rules to every string leaf of a value.

    Parameters
    ----------
    cleaner:
        The cleaning primitive ``(text, rules) -> str``. Defaults to the
        shared bleach-backed ``HtmlCleaner``.
    """

    def __init__(self, cleaner: CleanHTML | None = None) -> None:
        self._cleaner: CleanHTML = cleaner if cleaner is not None else default_cleaner()

    def deep_sanitize(self, value: Any, rules: Any) -> Any:
        """Return a sanitized copy of ``value`` with the same shape."""
        if isinstance(value, (list, tuple)):
            return self._clean_array(value, rules)
        if isinstance(value, Mapping):
            return self._clean_object(value, rules)
        if isinstance(value, str):
            return self._clean_one_item(value, rules)
        return value

    def clean(self, text: str, rules: RuleSet | None = None) -> str:
        """Clean one string; without ``rules`` all markup is stripped."""
        return self._cleaner(text, rules if rules is not None else {})

    def _clean_array(self, items: list[Any] | tuple[Any, ...], rule_for_item: Any) -> list[Any]:
        return [self.deep_sanitize(item, rule_for_item) for item in items]

    def _clean_object(self, data: Mapping[str, Any], rules: Any) -> dict[str, Any]:
        clean_data: dict[str, Any] = {}
        for field_name, item in data.items():
            field_rule = rules.get(field_name) if isinstance(rules, Mapping) else None
            rule_for_item = field_rule if is_rule(field_rule) else rules
            clean_data[field_name] = self.deep_sanitize(item, rule_for_item)
        return clean_data

    def _clean_one_item(self, text: str, rule: Any) -> str:
        if isinstance(rule, Mapping):
            return self.clean(text, rule)
        if rule is False:
            return self.clean(text, {})
        return text
