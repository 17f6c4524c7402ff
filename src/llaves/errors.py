"""Exception classes for llaves.

Malformed attribute brackets and unattached attributes are never errors:
they degrade to literal text. Exceptions are reserved for misuse of the
API (bad options, unknown plugins, rendering an unresolved tree).
"""

from __future__ import annotations


class LlavesError(Exception):
    """Base exception for all llaves errors."""

    pass


class ParseError(LlavesError):
    """Error during Markdown parsing.

    Raised when the parser is handed input it cannot work with at all
    (for example a non-string source).
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ConfigError(LlavesError):
    """Invalid configuration value.

    Raised by the ``from_dict`` constructors when a recognised key carries
    a value of the wrong shape.
    """

    def __init__(self, option: str, message: str) -> None:
        self.option = option
        super().__init__(f"Option '{option}': {message}")


class RenderError(LlavesError):
    """Error during HTML rendering.

    Raised when the renderer meets a node it cannot emit, such as an
    attribute placeholder left behind because the resolver was skipped.
    """

    pass


class PluginError(LlavesError):
    """Error in plugin selection.

    Raised when an unknown plugin name is requested.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
