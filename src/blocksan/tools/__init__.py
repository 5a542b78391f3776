"""Tool subsystem for blocksan.

The registry module provides the decorator-based registration surface.
Third-party tool packages register via ``importlib.metadata``
entry-points under the "blocksan.tools" group.

Example
-------
Declare a tool in pyproject.toml:

.. code-block:: toml

    [project.entry-points."blocksan.tools"]
    checklist = "my_package.tools:Checklist"
"""
from __future__ import annotations

from blocksan.tools.base import BlockTool, InlineTool, Tool, ToolSettings
from blocksan.tools.registry import (
    ToolAlreadyRegisteredError,
    ToolNotFoundError,
    ToolRegistry,
)

__all__ = [
    "BlockTool",
    "InlineTool",
    "Tool",
    "ToolAlreadyRegisteredError",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolSettings",
]
