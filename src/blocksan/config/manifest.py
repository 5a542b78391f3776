"""Declarative tool manifests.

A manifest describes tools without writing Python classes::

    tools:
      bold:
        inline: true
        sanitize: {b: true}
      paragraph:
        inline_toolbar: [bold]
        sanitize:
          text: {br: true}

Each entry becomes a generated ``BlockTool`` or ``InlineTool`` subclass
registered under its key. JSON manifests load too, JSON being a subset
of YAML.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from blocksan.tools.base import BlockTool, InlineTool, Tool, ToolSettings
from blocksan.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

_TOOL_KEYS = frozenset({"inline", "sanitize", "inline_toolbar", "config"})


class ManifestError(ValueError):
    """Raised when a tool manifest cannot be read or is malformed."""


def _class_name(name: str) -> str:
    parts = [part for part in name.replace("-", "_").split("_") if part]
    return "".join(part[:1].upper() + part[1:] for part in parts) or "Tool"


def _build_tool(name: str, entry: Mapping[str, Any]) -> tuple[type[Tool], ToolSettings]:
    unknown = set(entry) - _TOOL_KEYS
    if unknown:
        raise ManifestError(f"Tool {name!r} has unknown keys: {', '.join(sorted(unknown))}")

    sanitize = entry.get("sanitize")
    if sanitize is not None and not isinstance(sanitize, Mapping):
        raise ManifestError(f"Tool {name!r}: 'sanitize' must be a mapping, got {sanitize!r}")

    toolbar = entry.get("inline_toolbar", False)
    if not isinstance(toolbar, (bool, list)):
        raise ManifestError(
            f"Tool {name!r}: 'inline_toolbar' must be true, false or a list of names"
        )

    config = entry.get("config")
    if config is None:
        config = {}
    if not isinstance(config, Mapping):
        raise ManifestError(f"Tool {name!r}: 'config' must be a mapping")

    base: type[Tool] = InlineTool if entry.get("inline", False) else BlockTool
    cls = type(_class_name(name), (base,), {"sanitize": sanitize, "__module__": __name__})
    return cls, ToolSettings(inline_toolbar=toolbar, config=dict(config))


def registry_from_manifest(
    manifest: Mapping[str, Any], name: str = "manifest"
) -> ToolRegistry:
    """Build a ``ToolRegistry`` from an already parsed manifest.

    Raises
    ------
    ManifestError
        If the manifest does not have the expected shape.
    """
    if not isinstance(manifest, Mapping):
        raise ManifestError("Manifest must be a mapping with a 'tools' key")
    tools = manifest.get("tools")
    if not isinstance(tools, Mapping):
        raise ManifestError("Manifest 'tools' must be a mapping of tool name to settings")

    registry = ToolRegistry(name)
    for tool_name, entry in tools.items():
        if entry is None:
            entry = {}
        if not isinstance(entry, Mapping):
            raise ManifestError(f"Tool {tool_name!r} must be a mapping, got {entry!r}")
        cls, settings = _build_tool(str(tool_name), entry)
        registry.register_class(str(tool_name), cls, settings)
    logger.debug("Loaded %d tool(s) from manifest %r", len(registry), name)
    return registry


def load_manifest(path: str | Path) -> ToolRegistry:
    """Read a YAML (or JSON) manifest file and build a ``ToolRegistry``.

    Raises
    ------
    ManifestError
        If the file cannot be read, parsed, or has the wrong shape.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in manifest {path}: {exc}") from exc
    return registry_from_manifest(data, name=path.name)
