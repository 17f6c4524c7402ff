"""ContextVar-based parse configuration for llaves.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Markdown instance, read by the parser and the
attribute resolver in the same context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # In Markdown class
    md = Markdown(plugins=["table"], attributes={"scope": "permissive"})
    html = md("**bold**{data-x=1}")

    # Direct parser usage (advanced)
    from llaves.config import parse_config_context, ParseConfig

    with parse_config_context(ParseConfig(tables_enabled=True)):
        blocks = Parser(source).parse()

"""

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from llaves.errors import ConfigError

# Permission tiers understood by the scope filter. Any other string is
# accepted and behaves like "extended".
SCOPES: tuple[str, ...] = ("none", "global", "specific", "extended", "permissive", "every")


def _valid_fields(cls: type) -> set[str]:
    return {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]


@dataclass(frozen=True, slots=True)
class AttributeOptions:
    """Immutable options for attribute attachment and filtering.

    Attributes:
        scope: Permission tier for attribute names (default "extended")
        extend: Node type (or HTML tag, or "*") to names always allowed there
        allow_dangerous_handlers: Keep on* DOM event handler attributes
        enable_heading_inline: Let a trailing inline bracket target its heading
        disable_block: Turn every block bracket into literal text

    """

    scope: str = "extended"
    extend: Mapping[str, tuple[str, ...]] = field(default_factory=dict, hash=False)
    allow_dangerous_handlers: bool = False
    enable_heading_inline: bool = True
    disable_block: bool = False

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "AttributeOptions":
        """Create AttributeOptions from a plain mapping.

        Unknown keys are ignored. ``extend`` values are normalised to tuples.

        Raises:
            ConfigError: If ``scope`` is not a string or ``extend`` is not a
                mapping of names to lists of attribute names.

        Example:
            >>> opts = AttributeOptions.from_dict({"extend": {"image": ["loading"]}})
            >>> opts.extend["image"]
            ('loading',)

        """
        valid_fields = _valid_fields(cls)
        filtered = {k: v for k, v in options.items() if k in valid_fields}

        if "scope" in filtered and not isinstance(filtered["scope"], str):
            raise ConfigError("scope", f"expected a string, got {type(filtered['scope']).__name__}")

        if "extend" in filtered:
            filtered["extend"] = _normalize_extend(filtered["extend"])

        return cls(**filtered)


def _normalize_extend(extend: object) -> dict[str, tuple[str, ...]]:
    if extend is None:
        return {}
    if not isinstance(extend, Mapping):
        raise ConfigError("extend", f"expected a mapping, got {type(extend).__name__}")

    normalized: dict[str, tuple[str, ...]] = {}
    for key, names in extend.items():
        if names is None:
            names = ()
        if isinstance(names, str) or not isinstance(names, Iterable):
            raise ConfigError("extend", f"entry {key!r} must be a list of attribute names")
        names = tuple(names)
        if not all(isinstance(n, str) for n in names):
            raise ConfigError("extend", f"entry {key!r} must contain only strings")
        normalized[str(key)] = names
    return normalized


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Set once per Markdown instance, read by all parsers in the context.

    Attributes:
        tables_enabled: Enable GFM table parsing
        strikethrough_enabled: Enable ~~strikethrough~~ syntax
        attributes_enabled: Recognise {...} attribute brackets
        attribute_options: Filtering and attachment options for brackets

    """

    tables_enabled: bool = False
    strikethrough_enabled: bool = False
    attributes_enabled: bool = True
    attribute_options: AttributeOptions = field(default_factory=AttributeOptions)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored. A mapping under ``attribute_options`` is
        converted with :meth:`AttributeOptions.from_dict`.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "tables_enabled": True,
            ...     "attribute_options": {"scope": "permissive"},
            ...     "unknown_key": "ignored",
            ... })
            >>> config.attribute_options.scope
            'permissive'

        """
        valid_fields = _valid_fields(cls)
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        options = filtered.get("attribute_options")
        if isinstance(options, Mapping):
            filtered["attribute_options"] = AttributeOptions.from_dict(options)
        elif options is not None and not isinstance(options, AttributeOptions):
            raise ConfigError(
                "attribute_options",
                f"expected a mapping or AttributeOptions, got {type(options).__name__}",
            )
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(tables_enabled=True)):
        ...     blocks = Parser("| a | b |\\n|---|---|").parse()

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "SCOPES",
    "AttributeOptions",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
