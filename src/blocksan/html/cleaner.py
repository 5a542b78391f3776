"""HTML cleaning primitive built on bleach.

``HtmlCleaner`` turns a ``RuleSet`` into a bleach allow-list and cleans
one string with it. Disallowed tags are stripped rather than escaped, so
their text survives, except for ``script``, ``style``, ``textarea`` and
``option`` whose bodies are dropped along with the element.

Fixed attribute values (``{"a": {"rel": "nofollow"}}``) are not a bleach
concept; they are written onto allowed elements by ``ForcedAttributeFilter``
after bleach has sanitized the token stream.
"""
from __future__ import annotations

import functools
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

import bleach
from bleach.html5lib_shim import (
    BleachHTMLParser,
    BleachHTMLTokenizer,
    Filter,
    ReparseException,
)

from blocksan.rules.types import RuleSet

CleanHTML = Callable[[str, RuleSet], str]

_ELEMENT_TOKENS = ("StartTag", "EmptyTag")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class _StrippingTokenizer(BleachHTMLTokenizer):
    """Tokenizer that strips disallowed tags without inserting text.

    bleach writes a newline in place of a stripped block-level start tag
    when a token was emitted before it. Stripped markup must leave the
    surrounding text as it was, so the last-token marker is cleared first.
    """

    def emitCurrentToken(self):
        self.emitted_last_token = None
        super().emitCurrentToken()


class _StrippingParser(BleachHTMLParser):
    """``BleachHTMLParser`` that tokenizes with ``_StrippingTokenizer``."""

    def _parse(self, stream, innerHTML=False, container="div", scripting=True, **kwargs):
        self.innerHTMLMode = innerHTML
        self.container = container
        self.scripting = scripting
        self.tokenizer = _StrippingTokenizer(
            stream=stream, consume_entities=self.consume_entities, parser=self, **kwargs
        )
        self.reset()

        try:
            self.mainLoop()
        except ReparseException:
            self.reset()
            self.mainLoop()


@dataclass(frozen=True)
class CleanerOptions:
    """Settings for ``HtmlCleaner``.

    Parameters
    ----------
    protocols:
        URL schemes allowed in ``href``/``src`` style attributes.
    strip_comments:
        Remove HTML comments.
    drop_content_tags:
        Tags whose whole body is removed when the tag is not allowed.
    """

    protocols: frozenset[str] = frozenset({"http", "https", "mailto"})
    strip_comments: bool = True
    drop_content_tags: tuple[str, ...] = ("script", "style", "textarea", "option")


class ForcedAttributeFilter(Filter):
    """Sets fixed attribute values on matching elements."""

    def __init__(self, source: Any, forced: Mapping[str, Mapping[str, str]]) -> None:
        super().__init__(source)
        self.forced = forced

    def __iter__(self):
        for token in Filter.__iter__(self):
            if token["type"] in _ELEMENT_TOKENS and token["name"] in self.forced:
                attrs = token.get("data") or {}
                for name, value in self.forced[token["name"]].items():
                    attrs[(None, name)] = value
                token["data"] = attrs
            yield token


def _tag_allowed(rule: object) -> bool:
    return rule is True or isinstance(rule, Mapping) or callable(rule)


def _attribute_allowed(rule: object, name: str, value: str) -> bool:
    if isinstance(rule, Mapping):
        attr_rule = rule.get(name)
        if attr_rule is True:
            return True
        if callable(attr_rule):
            return bool(attr_rule(value))
        # fixed values are re-added by ForcedAttributeFilter
        return False
    if callable(rule):
        return bool(rule(name, value))
    return False


class HtmlCleaner:
    """Default ``CleanHTML`` implementation.

    Instances are callables ``(text, rules) -> str``, so any function with
    that signature can be injected in their place.

    Parameters
    ----------
    options:
        Cleaner settings; defaults to ``CleanerOptions()``.
    """

    def __init__(self, options: CleanerOptions | None = None) -> None:
        self._options = options or CleanerOptions()
        self._content_patterns = {
            tag: re.compile(
                rf"<{tag}\b[^>]*>.*?(</{tag}\s*>|$)", re.DOTALL | re.IGNORECASE
            )
            for tag in self._options.drop_content_tags
        }

    @property
    def options(self) -> CleanerOptions:
        return self._options

    def __call__(self, text: str, rules: RuleSet | None = None) -> str:
        return self.clean(text, rules)

    def clean(self, text: str, rules: RuleSet | None = None) -> str:
        """Return ``text`` with every element not allowed by ``rules`` removed.

        ``None`` or an empty mapping strips all markup.
        """
        rules = rules or {}
        allowed = frozenset(tag for tag, rule in rules.items() if _tag_allowed(rule))

        for tag, pattern in self._content_patterns.items():
            if tag not in allowed:
                text = pattern.sub("", text)

        def allow_attribute(tag: str, name: str, value: str) -> bool:
            return _attribute_allowed(rules.get(tag), name, value)

        forced = {
            tag: {name: value for name, value in rule.items() if isinstance(value, str)}
            for tag, rule in rules.items()
            if tag in allowed and isinstance(rule, Mapping)
        }
        forced = {tag: values for tag, values in forced.items() if values}
        filters = [functools.partial(ForcedAttributeFilter, forced=forced)] if forced else []

        cleaner = bleach.Cleaner(
            tags=allowed,
            attributes=allow_attribute,
            protocols=self._options.protocols,
            strip=True,
            strip_comments=self._options.strip_comments,
            filters=filters,
        )
        cleaner.parser = _StrippingParser(
            tags=allowed,
            strip=True,
            consume_entities=False,
            namespaceHTMLElements=False,
        )
        return cleaner.clean(text)


@functools.lru_cache(maxsize=1)
def default_cleaner() -> HtmlCleaner:
    """Return a shared ``HtmlCleaner`` with default options."""
    return HtmlCleaner()
