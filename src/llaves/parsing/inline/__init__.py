"""Inline parsing subsystem for the llaves parser.

Provides mixins for parsing inline Markdown content:
- Emphasis and strong (*, _)
- Code spans (`)
- Links, reference links, images and autolinks
- Strikethrough (~~)
- Attribute brackets ({#id .class key=value})

Architecture:
Uses the CommonMark delimiter stack algorithm for emphasis.
See: https://spec.commonmark.org/0.31.2/#emphasis-and-strong-emphasis

Attribute brackets become AttributeInline placeholders here; attaching
them to a node is left to ``llaves.attributes.resolve_attributes``.

"""

from __future__ import annotations

from llaves.parsing.inline.core import InlineParsingCoreMixin
from llaves.parsing.inline.emphasis import EmphasisMixin
from llaves.parsing.inline.links import LinkParsingMixin
from llaves.parsing.inline.tokens import DelimiterRun, InlineItem


class InlineParsingMixin(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
):
    """Combined inline parsing mixin.

    Combines all inline parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _strikethrough_enabled: bool
        - _attributes_enabled: bool
        - _link_refs: dict[str, tuple[str, str]]

    """

    pass


__all__ = [
    "InlineParsingMixin",
    "InlineParsingCoreMixin",
    "EmphasisMixin",
    "LinkParsingMixin",
    "DelimiterRun",
    "InlineItem",
]
