"""Plugin selection for llaves.

Plugins switch optional syntax on:
- table: GFM-style pipe tables
- strikethrough: ~~deleted~~ syntax

Attribute brackets are core syntax, not a plugin; they are configured with
``AttributeOptions``.

Usage:
    >>> from llaves import Markdown
    >>> md = Markdown(plugins=["table", "strikethrough"])
    >>> md = Markdown(plugins=["all"])

Parsing for each plugin is built into the parser; enabling one only flips
a ParseConfig flag, so there is no per-plugin state.

"""

from __future__ import annotations

from collections.abc import Iterable

from llaves.errors import PluginError
from llaves.utils.logger import get_logger

logger = get_logger(__name__)

# Plugin name -> ParseConfig field it enables
BUILTIN_PLUGINS: dict[str, str] = {
    "table": "tables_enabled",
    "strikethrough": "strikethrough_enabled",
}


def resolve_plugins(names: Iterable[str] | None) -> tuple[str, ...]:
    """Validate plugin names and expand ``"all"``.

    Raises:
        PluginError: If a name is not a built-in plugin

    Example:
        >>> resolve_plugins(["all"])
        ('table', 'strikethrough')

    """
    requested = list(names or ())
    for name in requested:
        if name != "all" and name not in BUILTIN_PLUGINS:
            available = ", ".join(sorted(BUILTIN_PLUGINS))
            logger.debug("Rejected unknown plugin %r", name)
            raise PluginError(name, f"unknown plugin. Available: {available}, all")
    if "all" in requested:
        return tuple(BUILTIN_PLUGINS)
    return tuple(dict.fromkeys(requested))


def plugin_flags(names: Iterable[str]) -> dict[str, bool]:
    """ParseConfig keyword arguments enabling the given (resolved) plugins."""
    enabled = set(names)
    return {field: name in enabled for name, field in BUILTIN_PLUGINS.items()}


__all__ = ["BUILTIN_PLUGINS", "resolve_plugins", "plugin_flags"]
