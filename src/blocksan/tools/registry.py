"""Tool registry for blocksan.

Provides a decorator-based registration system for block and inline
tools. Third-party tool packages register via this system by declaring
entry-points in their own ``pyproject.toml`` under the
"blocksan.tools" group.

Example
-------
Register tools with the decorator::

    from blocksan.tools import BlockTool, InlineTool, ToolRegistry, ToolSettings

    registry = ToolRegistry()

    @registry.register("bold")
    class Bold(InlineTool):
        sanitize = {"b": True}

    @registry.register("paragraph", settings=ToolSettings(inline_toolbar=True))
    class Paragraph(BlockTool):
        sanitize = {"text": {"br": True}}

Load all installed tools via entry-points::

    registry.load_entrypoints("blocksan.tools")

Retrieve a tool by name::

    cls = registry.get("paragraph")
    rules = cls.sanitize

The sanitizer caches rules composed from a registry, so a registry is
expected to stay unchanged once sanitizing starts. Call
``RuleComposer.invalidate()`` after changing it.
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from blocksan.tools.base import InlineTool, Tool, ToolSettings

logger = logging.getLogger(__name__)

_DEFAULT_SETTINGS = ToolSettings()


class ToolNotFoundError(KeyError):
    """Raised when a requested tool name is not in the registry."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.tool_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Tool {name!r} is not registered in the {registry_name!r} registry. "
            "Check that the tool package is installed and its entry-points are declared."
        )


class ToolAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.tool_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Tool {name!r} is already registered in the {registry_name!r} registry. "
            "Use a unique name or explicitly deregister the existing entry first."
        )


class ToolRegistry:
    """Registry of tool classes and their settings.

    Tools are kept in registration order; that order decides which inline
    tool wins when several declare rules for the same tag.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    """

    #: Class attribute under which a tool publishes its sanitize rules.
    SANITIZE_CONFIG = "sanitize"

    def __init__(self, name: str = "tools") -> None:
        self._name = name
        self._tools: dict[str, type[Tool]] = {}
        self._settings: dict[str, ToolSettings] = {}

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self, name: str, settings: ToolSettings | None = None
    ) -> Callable[[type[Tool]], type[Tool]]:
        """Return a class decorator that registers the decorated tool.

        Parameters
        ----------
        name:
            The unique string key for this tool.
        settings:
            Optional settings for the tool; defaults to no inline toolbar.

        Returns
        -------
        Callable[[type[Tool]], type[Tool]]
            A decorator that registers the class and returns it unchanged.

        Raises
        ------
        ToolAlreadyRegisteredError
            If ``name`` is already in use in this registry.
        TypeError
            If the decorated class does not subclass ``Tool``.
        """

        def decorator(cls: type[Tool]) -> type[Tool]:
            self.register_class(name, cls, settings)
            return cls

        return decorator

    def register_class(
        self, name: str, cls: type[Tool], settings: ToolSettings | None = None
    ) -> None:
        """Register a tool class directly without using the decorator syntax.

        Raises
        ------
        ToolAlreadyRegisteredError
            If ``name`` is already registered.
        TypeError
            If ``cls`` is not a subclass of ``Tool``.
        """
        if name in self._tools:
            raise ToolAlreadyRegisteredError(name, self._name)
        if not (isinstance(cls, type) and issubclass(cls, Tool)):
            raise TypeError(
                f"Cannot register {cls!r} under {name!r}: "
                f"it must be a subclass of {Tool.__name__}."
            )
        self._tools[name] = cls
        if settings is not None:
            self._settings[name] = settings
        logger.debug(
            "Registered tool %r -> %s in registry %r",
            name,
            cls.__qualname__,
            self._name,
        )

    def deregister(self, name: str) -> None:
        """Remove a tool and its settings from the registry.

        Raises
        ------
        ToolNotFoundError
            If ``name`` is not currently registered.
        """
        if name not in self._tools:
            raise ToolNotFoundError(name, self._name)
        del self._tools[name]
        self._settings.pop(name, None)
        logger.debug("Deregistered tool %r from registry %r", name, self._name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> type[Tool]:
        """Return the tool class registered under ``name``.

        Raises
        ------
        ToolNotFoundError
            If no tool is registered under ``name``.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name, self._name) from None

    def get_tool_settings(self, name: str) -> ToolSettings:
        """Return the settings of the tool registered under ``name``.

        Raises
        ------
        ToolNotFoundError
            If no tool is registered under ``name``.
        """
        if name not in self._tools:
            raise ToolNotFoundError(name, self._name)
        return self._settings.get(name, _DEFAULT_SETTINGS)

    @property
    def available(self) -> Mapping[str, type[Tool]]:
        """Read-only view of every registered tool, in registration order."""
        return MappingProxyType(self._tools)

    @property
    def inline(self) -> Mapping[str, type[Tool]]:
        """Registered inline tools, in registration order."""
        return {
            name: cls for name, cls in self._tools.items() if issubclass(cls, InlineTool)
        }

    def list_tools(self) -> list[str]:
        """Return a sorted list of all registered tool names."""
        return sorted(self._tools)

    def __contains__(self, name: object) -> bool:
        """Support ``"paragraph" in registry`` membership test."""
        return name in self._tools

    def __len__(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry(name={self._name!r}, tools={self.list_tools()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = "blocksan.tools") -> None:
        """Discover and register tools declared as package entry-points.

        Each entry-point value is imported and registered under the
        entry-point name with default settings. Tools that are already
        registered are skipped with a debug-level log entry, so repeated
        calls are idempotent.

        Example
        -------
        In a downstream package's ``pyproject.toml``::

            [project.entry-points."blocksan.tools"]
            checklist = "my_package.tools:Checklist"
        """
        entry_points = importlib.metadata.entry_points(group=group)
        for ep in entry_points:
            if ep.name in self._tools:
                logger.debug(
                    "Entry-point %r already registered in %r; skipping.",
                    ep.name,
                    self._name,
                )
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_class(ep.name, cls)
            except (ToolAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered "
                    "in registry %r; skipping.",
                    ep.name,
                    self._name,
                )
