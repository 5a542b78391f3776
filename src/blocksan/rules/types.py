"""Sanitize rule types.

A ``RuleSet`` maps a tag name to an element rule::

    {
        "b": True,
        "a": {
            "href": True,
            "rel": "nofollow",
            "target": "_blank",
        },
    }

Element rules
-------------
``True``
    Keep the tag, drop all of its attributes.
``False`` / absent
    Strip the tag (its text content is kept).
mapping
    Keep the tag; each entry is an attribute rule: ``True``/``False``,
    a fixed replacement string, or a predicate ``(value) -> bool``.
callable
    Keep the tag; called as ``(attribute, value) -> bool`` per attribute.

Block data is sanitized per field, so tools declare ``FieldRules``: a
mapping from field name to either a ``RuleSet`` or a nested mapping of the
same shape.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

AttributeRule = Union[bool, str, Callable[[str], bool]]
ElementRule = Union[bool, Mapping[str, AttributeRule], Callable[[str, str], bool]]
RuleSet = Mapping[str, ElementRule]
FieldRules = Mapping[str, Any]

#: Structural punctuation inside formatted text; never stripped.
LINE_BREAK_TAGS: tuple[str, ...] = ("br", "wbr")


def is_rule(value: object) -> bool:
    """Return True if ``value`` carries a sanitize policy.

    Mappings, booleans and callables are rules::

        {"a": True}, {}, False, True, lambda value: ...

    ``None``, numbers and strings are plain data, not rules.
    """
    return isinstance(value, (Mapping, bool)) or callable(value)


def merge_rules(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow-merge rule mappings left to right; later sources win.

    Only top-level keys are combined. A nested value present in a later
    source replaces the earlier one wholesale. ``None`` sources are skipped.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged


def allow_line_breaks(rules: dict[str, Any]) -> dict[str, Any]:
    """Force every tag in ``LINE_BREAK_TAGS`` to ``True`` in ``rules``.

    Mutates and returns ``rules``.
    """
    for tag in LINE_BREAK_TAGS:
        rules[tag] = True
    return rules
