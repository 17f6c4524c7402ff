"""Typed AST nodes for llaves.

All AST nodes are frozen dataclasses with slots, so trees are immutable and
safe to share across threads. Rewrites (attribute resolution included)
build new nodes with ``dataclasses.replace``.

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── FencedCode
│   ├── IndentedCode
│   ├── BlockQuote
│   ├── List
│   ├── ListItem
│   ├── ThematicBreak
│   ├── Table / TableRow / TableCell
│   └── AttributeBlock (placeholder)
└── Inline (inline elements)
    ├── Text
    ├── Emphasis
    ├── Strong
    ├── Strikethrough
    ├── Link
    ├── LinkReference
    ├── Image
    ├── CodeSpan
    ├── LineBreak
    ├── SoftBreak
    └── AttributeInline (placeholder)

Each class names its kind in ``node_type``. The names follow the mdast
vocabulary ("inlineCode", "linkReference", "delete", ...) because attribute
``extend`` options are keyed by them.

Nodes that can receive attributes carry a ``properties`` mapping. It stays
``None`` until an attribute bracket is attached, and renderers emit it as
HTML attributes.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal

from llaves.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages and debugging.

    """

    node_type: ClassVar[str] = "node"

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content."""

    node_type: ClassVar[str] = "text"

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    node_type: ClassVar[str] = "emphasis"

    children: tuple[Inline, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    node_type: ClassVar[str] = "strong"

    children: tuple[Inline, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Deleted text (strikethrough plugin).

    Markdown: ~~text~~
    HTML: <del>text</del>

    """

    node_type: ClassVar[str] = "delete"

    children: tuple[Inline, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Inline hyperlink.

    Markdown: [text](url "title")
    HTML: <a href="url" title="title">text</a>

    """

    node_type: ClassVar[str] = "link"

    url: str
    title: str | None
    children: tuple[Inline, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class LinkReference(Node):
    """Hyperlink resolved through a link reference definition.

    Markdown: [text][label], [label][] or [label]
    HTML: <a href="url" title="title">text</a>

    The destination is copied from the definition at parse time; ``label``
    keeps the raw label as written.

    """

    node_type: ClassVar[str] = "linkReference"

    url: str
    title: str | None
    label: str
    reference_type: Literal["full", "collapsed", "shortcut"]
    children: tuple[Inline, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image.

    Markdown: ![alt](url "title")
    HTML: <img src="url" alt="alt" title="title" />

    """

    node_type: ClassVar[str] = "image"

    url: str
    alt: str
    title: str | None = None
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    node_type: ClassVar[str] = "inlineCode"

    code: str
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break (backslash or two trailing spaces)."""

    node_type: ClassVar[str] = "break"


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline in a paragraph)."""

    node_type: ClassVar[str] = "softBreak"


@dataclass(frozen=True, slots=True)
class AttributeInline(Node):
    """Placeholder for an inline attribute bracket.

    Markdown: **word**{.class}

    Produced by the inline parser and always consumed by the attribute
    resolver, which merges it into a neighbour or turns it into Text.

    """

    node_type: ClassVar[str] = "attributeInline"

    attributes: dict[str, str] = field(hash=False)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX or setext heading.

    Markdown: # Heading or Heading\\n=======
    HTML: <h1>Heading</h1>

    """

    node_type: ClassVar[str] = "heading"

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]
    style: Literal["atx", "setext"] = "atx"
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph of inline content."""

    node_type: ClassVar[str] = "paragraph"

    children: tuple[Inline, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class FencedCode(Node):
    """Fenced code block.

    Markdown: ```python {.numbered}
    HTML: <pre><code class="language-python">...</code></pre>

    ``info`` is the full info string; ``language`` and ``meta`` split it at
    the first whitespace.

    """

    node_type: ClassVar[str] = "code"

    code: str
    info: str | None = None
    marker: Literal["`", "~"] = "`"
    properties: dict[str, str] | None = field(default=None, hash=False)

    @property
    def language(self) -> str | None:
        """First word of the info string, if any."""
        if not self.info:
            return None
        return self.info.split(None, 1)[0]

    @property
    def meta(self) -> str | None:
        """Info string text after the language word, if any."""
        if not self.info:
            return None
        parts = self.info.split(None, 1)
        if len(parts) < 2:
            return None
        return parts[1].strip() or None


@dataclass(frozen=True, slots=True)
class IndentedCode(Node):
    """Indented code block (four or more spaces)."""

    node_type: ClassVar[str] = "code"

    code: str
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote.

    Markdown: > quoted text
    HTML: <blockquote>...</blockquote>

    """

    node_type: ClassVar[str] = "blockquote"

    children: tuple[Block, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item."""

    node_type: ClassVar[str] = "listItem"

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    ``tight`` lists render their single-paragraph items without <p> tags.

    """

    node_type: ClassVar[str] = "list"

    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int = 1
    tight: bool = True
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break.

    Markdown: --- or *** or ___
    HTML: <hr />

    """

    node_type: ClassVar[str] = "thematicBreak"

    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class TableCell(Node):
    """Table cell (table plugin)."""

    node_type: ClassVar[str] = "tableCell"

    children: tuple[Inline, ...]
    is_header: bool = False
    align: Literal["left", "center", "right"] | None = None


@dataclass(frozen=True, slots=True)
class TableRow(Node):
    """Table row (table plugin)."""

    node_type: ClassVar[str] = "tableRow"

    cells: tuple[TableCell, ...]
    is_header: bool = False


@dataclass(frozen=True, slots=True)
class Table(Node):
    """GFM pipe table (table plugin)."""

    node_type: ClassVar[str] = "table"

    head: tuple[TableRow, ...]
    body: tuple[TableRow, ...]
    alignments: tuple[Literal["left", "center", "right"] | None, ...]
    properties: dict[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True, slots=True)
class AttributeBlock(Node):
    """Placeholder for an attribute bracket on a line of its own.

    Markdown:
        # Title
        {#intro .lead}

    Always consumed by the attribute resolver, which merges it into the
    preceding block or replaces it with a literal paragraph.

    """

    node_type: ClassVar[str] = "attributeBlock"

    attributes: dict[str, str] = field(hash=False)


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node of a parsed document."""

    node_type: ClassVar[str] = "root"

    children: tuple[Block, ...]


# =============================================================================
# Type aliases
# =============================================================================

type Inline = (
    Text
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | LinkReference
    | Image
    | CodeSpan
    | LineBreak
    | SoftBreak
    | AttributeInline
)

type Block = (
    Heading
    | Paragraph
    | FencedCode
    | IndentedCode
    | BlockQuote
    | List
    | ListItem
    | ThematicBreak
    | Table
    | AttributeBlock
)

# Nodes that may carry a ``properties`` mapping.
type Target = (
    Heading
    | Paragraph
    | FencedCode
    | IndentedCode
    | BlockQuote
    | List
    | ThematicBreak
    | Table
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | LinkReference
    | Image
    | CodeSpan
)
