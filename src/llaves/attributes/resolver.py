"""Attach attribute placeholders to their target nodes.

The parser leaves ``AttributeBlock`` and ``AttributeInline`` placeholders
in the tree. ``resolve_attributes`` runs three passes over it and returns
a new tree with no placeholders left:

1. Code meta: ``{...}`` after a fenced code block's language word.
2. Block pass: a bracket line attaches to the block before it.
3. Inline pass: a bracket attaches to the inline node before it, or to
   the enclosing heading when it ends the heading text.

Brackets with no valid target turn back into literal text.

Example:
    >>> blocks = Parser("# Title {#top}").parse()
    >>> doc = resolve_attributes(Document(location=blocks[0].location, children=blocks))
    >>> doc.children[0].properties
    {'id': 'top'}

"""

import dataclasses

from llaves.attributes.compiler import serialize_attributes
from llaves.attributes.meta import parse_meta
from llaves.attributes.scope import filter_attributes, tag_for
from llaves.config import AttributeOptions, get_parse_config
from llaves.nodes import (
    AttributeBlock,
    AttributeInline,
    BlockQuote,
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    Image,
    IndentedCode,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    Text,
    ThematicBreak,
)
from llaves.utils.logger import get_logger
from llaves.visitor import transform

logger = get_logger(__name__)

BLOCK_TARGETS = (
    Heading,
    Paragraph,
    FencedCode,
    IndentedCode,
    BlockQuote,
    List,
    ThematicBreak,
    Table,
)

INLINE_TARGETS = (
    Strong,
    Emphasis,
    Link,
    Image,
    CodeSpan,
    Strikethrough,
    LinkReference,
)

_FLOW_CONTAINERS = (Document, BlockQuote, ListItem)

_PHRASING_PARENTS = (
    Paragraph,
    Heading,
    Link,
    LinkReference,
    Emphasis,
    Strong,
    Strikethrough,
    TableCell,
)


def assign_attributes[N: Node](node: N, attributes: dict[str, str], options: AttributeOptions) -> N:
    """Merge filtered attributes into a target node's properties.

    Returns the node unchanged when nothing survives filtering. ``class``
    values are appended to an existing class; other keys overwrite.

    """
    if not attributes or options.scope == "none":
        return node

    filtered = filter_attributes(attributes, tag_for(node.node_type), options)
    if not filtered:
        return node

    merged = dict(getattr(node, "properties", None) or {})
    for key, value in filtered.items():
        previous = merged.get(key)
        if key == "class" and previous:
            merged[key] = f"{previous} {value}"
        else:
            merged[key] = value
    return dataclasses.replace(node, properties=merged)  # type: ignore[type-var]


def _fallback_paragraph(node: AttributeBlock) -> Paragraph:
    text = serialize_attributes(node.attributes)
    logger.debug("Unattached block attributes at %s kept as text: %s", node.location, text)
    return Paragraph(
        location=node.location,
        children=(Text(location=node.location, content=text),),
    )


def _fallback_text(node: AttributeInline) -> Text:
    text = serialize_attributes(node.attributes)
    logger.debug("Unattached inline attributes at %s kept as text: %s", node.location, text)
    return Text(location=node.location, content=text)


# =============================================================================
# Code meta
# =============================================================================


def _resolve_code_meta(node: Node, options: AttributeOptions) -> Node:
    if not isinstance(node, FencedCode) or not node.meta:
        return node
    attributes = parse_meta(node.meta)
    existing = node.properties
    if existing:
        # Existing keys win; class tokens already present are not repeated.
        present = set(existing.get("class", "").split())
        missing = [token for token in attributes.pop("class", "").split() if token not in present]
        attributes = {key: value for key, value in attributes.items() if key not in existing}
        if missing:
            attributes["class"] = " ".join(missing)
    return assign_attributes(node, attributes, options)


# =============================================================================
# Block pass
# =============================================================================


def _attach_block_attributes(children: list[Node], options: AttributeOptions) -> None:
    index = len(children) - 1
    while index >= 0:
        node = children[index]
        if isinstance(node, AttributeBlock):
            target_index = index - 1
            while target_index >= 0 and isinstance(children[target_index], AttributeBlock):
                target_index -= 1

            target = children[target_index] if target_index >= 0 else None
            if not options.disable_block and isinstance(target, BLOCK_TARGETS):
                children[target_index] = assign_attributes(target, node.attributes, options)
                del children[index]
            else:
                children[index] = _fallback_paragraph(node)
        index -= 1


def _resolve_flow(node: Node, options: AttributeOptions) -> Node:
    if not isinstance(node, _FLOW_CONTAINERS):
        return node
    if not any(isinstance(child, AttributeBlock) for child in node.children):
        return node
    children = list(node.children)
    _attach_block_attributes(children, options)
    return dataclasses.replace(node, children=tuple(children))


# =============================================================================
# Inline pass
# =============================================================================


def _is_blank_text(node: Node) -> bool:
    return isinstance(node, Text) and not node.content.strip()


def _ends_heading(children: list[Node], index: int) -> bool:
    """True when only whitespace follows ``index`` and real content precedes it."""
    if not all(_is_blank_text(child) for child in children[index + 1 :]):
        return False
    return any(not _is_blank_text(child) for child in children[:index])


def _strip_trailing_whitespace(children: list[Node]) -> None:
    if children and isinstance(children[-1], Text):
        last = children[-1]
        children[-1] = dataclasses.replace(last, content=last.content.rstrip())


def _resolve_phrasing(node: Node, options: AttributeOptions) -> Node:
    if not isinstance(node, _PHRASING_PARENTS):
        return node
    if not any(isinstance(child, AttributeInline) for child in node.children):
        return node

    parent = node
    children = list(node.children)
    heading_mode = isinstance(node, Heading) and options.enable_heading_inline

    index = len(children) - 1
    while index >= 0:
        child = children[index]
        if not isinstance(child, AttributeInline):
            index -= 1
            continue

        if heading_mode and _ends_heading(children, index):
            parent = assign_attributes(parent, child.attributes, options)
            del children[index:]
            _strip_trailing_whitespace(children)
            index -= 1
            continue

        previous = children[index - 1] if index > 0 else None
        if isinstance(previous, INLINE_TARGETS):
            children[index - 1] = assign_attributes(previous, child.attributes, options)
            del children[index]
        else:
            children[index] = _fallback_text(child)
        index -= 1

    return dataclasses.replace(parent, children=tuple(children))


# =============================================================================
# Entry point
# =============================================================================


def resolve_attributes(
    document: Document,
    options: AttributeOptions | None = None,
) -> Document:
    """Attach every attribute placeholder in ``document``.

    Args:
        document: Parsed document, possibly holding placeholders
        options: Attachment and filtering options; defaults to the options
            of the active parse config

    Returns:
        A new Document without AttributeBlock or AttributeInline nodes.

    """
    if options is None:
        options = get_parse_config().attribute_options

    doc = transform(document, lambda node: _resolve_code_meta(node, options))
    doc = transform(doc, lambda node: _resolve_flow(node, options))
    return transform(doc, lambda node: _resolve_phrasing(node, options))
