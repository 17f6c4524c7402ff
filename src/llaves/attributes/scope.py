"""Scope-based filtering of attribute names.

The scope option picks how permissive attachment is:

    none        nothing survives
    global      global HTML attributes, aria-*, data-*
    specific    global + attributes the target element accepts
    extended    specific + names listed in ``extend`` (default)
    permissive  everything except on* event handlers
    every       same as permissive

``on*`` DOM event handlers only survive when ``allow_dangerous_handlers``
is set. Unknown scopes behave like ``extended``. Names that cannot be
written as an HTML attribute name never survive, whatever the scope.
"""

import re
import unicodedata
from collections.abc import Callable, Mapping

from llaves.attributes.html_attributes import (
    DOM_EVENT_HANDLERS,
    ELEMENT_ATTRIBUTES,
    GLOBAL_ATTRIBUTES,
)
from llaves.config import AttributeOptions
from llaves.utils.logger import get_logger

logger = get_logger(__name__)

type Predicate = Callable[[str], bool]

# Node type -> HTML tag used for the per-element table and for ``extend``
TAG_BY_NODE_TYPE: dict[str, str] = {
    "image": "img",
    "link": "a",
    "heading": "h1",
    "strong": "strong",
    "emphasis": "em",
    "delete": "s",
    "inlineCode": "code",
    "code": "code",
    "linkReference": "a",
    "*": "*",
}

_ARIA_PATTERN = re.compile(r"^aria-[a-z][a-z.\-_\d]*$")
_DATA_PATTERN = re.compile(r"^data-[a-z][a-z_.\-0-9]*$")

# Characters an HTML attribute name cannot contain, besides controls
_NAME_FORBIDDEN = frozenset(" \t\n\f\r\"'>/=")

# Position of each tier in the cascade built by _predicates()
_CASCADE_START: dict[str, int] = {"extended": 0, "specific": 1, "global": 2}


def tag_for(node_type: str) -> str:
    """HTML tag implied by a node type, or "*" when there is none."""
    return TAG_BY_NODE_TYPE.get(node_type, "*")


def is_dangerous(name: str) -> bool:
    return name in DOM_EVENT_HANDLERS


def is_global(name: str) -> bool:
    return (
        name in GLOBAL_ATTRIBUTES
        or _ARIA_PATTERN.match(name) is not None
        or _DATA_PATTERN.match(name) is not None
    )


def is_valid_name(name: str) -> bool:
    """Whether ``name`` can be written out as an HTML attribute name."""
    return bool(name) and not any(
        char in _NAME_FORBIDDEN or unicodedata.category(char) == "Cc" for char in name
    )


def _extend_by_tag(extend: Mapping[str, tuple[str, ...]]) -> dict[str, frozenset[str]]:
    return {TAG_BY_NODE_TYPE.get(key, key): frozenset(names) for key, names in extend.items()}


def _predicates(tag: str, options: AttributeOptions) -> tuple[Predicate, ...]:
    """Ranked cascade: extended, specific, global."""
    extend = _extend_by_tag(options.extend)
    extended_names = extend.get(tag, frozenset()) | extend.get("*", frozenset())
    specific_names = ELEMENT_ATTRIBUTES.get(tag, frozenset())

    if options.allow_dangerous_handlers:

        def global_tier(name: str) -> bool:
            return is_global(name) or is_dangerous(name)

    else:
        global_tier = is_global

    return (
        extended_names.__contains__,
        specific_names.__contains__,
        global_tier,
    )


def _in_scope(tag: str, options: AttributeOptions) -> Predicate:
    scope = options.scope
    if scope == "none":
        return lambda name: False
    if scope in ("permissive", "every"):
        if options.allow_dangerous_handlers:
            return lambda name: True
        return lambda name: not is_dangerous(name)

    tiers = _predicates(tag, options)[_CASCADE_START.get(scope, 0) :]
    return lambda name: any(tier(name) for tier in tiers)


def filter_attributes(
    attributes: Mapping[str, str],
    tag: str,
    options: AttributeOptions,
) -> dict[str, str]:
    """Keep the attributes allowed on ``tag`` under ``options.scope``.

    Never raises. Returns a new dict; the input is not modified.

    Example:
        >>> filter_attributes({"id": "a", "onclick": "x()"}, "strong", AttributeOptions())
        {'id': 'a'}

    """
    allowed = _in_scope(tag, options)
    kept: dict[str, str] = {}
    for name, value in attributes.items():
        if allowed(name) and is_valid_name(name):
            kept[name] = value
        else:
            logger.debug("Dropped attribute %r on <%s> (scope=%s)", name, tag, options.scope)
    return kept
