"""Tool base classes and per-tool settings.

Tools are classes, not instances: the sanitizer only reads their
class-level ``sanitize`` rules. Block tools produce saved block data;
inline tools contribute formatting markup (bold, links, ...) that block
tools may enable through ``ToolSettings.inline_toolbar``.
"""
from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping


class Tool(ABC):
    """Base class for every registered tool.

    Subclasses publish their sanitize rules in ``sanitize``. For block
    tools the rules are keyed by data field; for inline tools they are a
    plain ``RuleSet`` keyed by tag.
    """

    sanitize: ClassVar[Mapping[str, Any] | None] = None


class BlockTool(Tool):
    """A tool whose saved output is a block of data."""


class InlineTool(Tool):
    """A formatting tool applied inside block text."""


@dataclass(frozen=True)
class ToolSettings:
    """Settings the host editor attached to a tool.

    Parameters
    ----------
    inline_toolbar:
        ``True`` enables every inline tool, a sequence enables only the
        named ones (in order), ``False`` enables none.
    config:
        Tool-specific configuration, opaque to the sanitizer.
    """

    inline_toolbar: bool | tuple[str, ...] = False
    config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        toolbar = self.inline_toolbar
        if not isinstance(toolbar, bool):
            if isinstance(toolbar, str):
                raise TypeError(
                    f"inline_toolbar must be a bool or a sequence of tool names, got {toolbar!r}"
                )
            object.__setattr__(self, "inline_toolbar", tuple(toolbar))
