"""HTML renderer using StringBuilder pattern.

Renders typed AST to HTML with O(n) performance using StringBuilder.

Attribute properties are written after a node's own attributes. A property
with the same name as an intrinsic attribute (``href`` on a link, ``start``
on a list) replaces it. On fenced and indented code the properties go on
the inner ``<code>`` element, and a ``class`` property is appended after
the ``language-*`` class.

Thread Safety:
The renderer holds no per-render state. Multiple threads can safely share a
single HtmlRenderer instance and call render() concurrently.
"""

import html
from collections.abc import Mapping
from urllib.parse import quote as url_quote

from llaves.attributes.scope import is_valid_name
from llaves.errors import RenderError
from llaves.nodes import (
    AttributeBlock,
    AttributeInline,
    Block,
    BlockQuote,
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    Image,
    IndentedCode,
    Inline,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableRow,
    Text,
    ThematicBreak,
)
from llaves.stringbuilder import StringBuilder
from llaves.utils.logger import get_logger

logger = get_logger(__name__)


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    CommonMark-compliant: escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def _encode_url(url: str) -> str:
    """Percent-encode a URL for an href or src attribute.

    Returns URL safe for href attribute (still needs html_escape for quotes).
    """
    return url_quote(html.unescape(url), safe="/:?#[]@!$&'()*+,;=-_.~%")


def format_attributes(
    intrinsic: Mapping[str, str],
    properties: Mapping[str, str] | None,
    *,
    merge_class: bool = False,
) -> str:
    """Format attributes as `` name="value"`` pairs, properties last.

    Names that cannot be written as an HTML attribute name are skipped.

    Args:
        intrinsic: Attributes the element always carries, in output order
        properties: Attributes attached with a bracket, or None
        merge_class: Append a ``class`` property to an intrinsic class
            instead of replacing it

    Example:
        >>> format_attributes({"href": "/a"}, {"class": "x", "hidden": ""})
        ' href="/a" class="x" hidden=""'

    """
    merged = dict(intrinsic)
    for name, value in (properties or {}).items():
        if not is_valid_name(name):
            logger.debug("Skipped invalid attribute name %r", name)
        elif merge_class and name == "class" and merged.get("class"):
            merged["class"] = f"{merged['class']} {value}"
        else:
            merged[name] = value
    return "".join(f' {name}="{html_escape(value)}"' for name, value in merged.items())


class HtmlRenderer:
    """Render AST to HTML using StringBuilder pattern.

    Usage:
        >>> from llaves import parse
        >>> doc = parse("Hello **World**{.big}")
        >>> HtmlRenderer().render(doc)
        '<p>Hello <strong class="big">World</strong></p>\\n'

    Raises:
        RenderError: When the tree still holds attribute placeholders, which
            means it was built with Parser directly and never resolved.

    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to HTML string.

        Args:
            node: Document AST root, with attributes already resolved

        Returns:
            HTML string

        """
        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder) -> None:
        """Render a block node."""
        match block:
            case Heading():
                tag = f"h{block.level}"
                sb.append(f"<{tag}{format_attributes({}, block.properties)}>")
                self._render_inlines(block.children, sb)
                sb.append(f"</{tag}>\n")
            case Paragraph():
                sb.append(f"<p{format_attributes({}, block.properties)}>")
                self._render_inlines(block.children, sb)
                sb.append("</p>\n")
            case FencedCode():
                self._render_fenced_code(block, sb)
            case IndentedCode():
                sb.append(f"<pre><code{format_attributes({}, block.properties)}>")
                sb.append(html_escape(block.code))
                sb.append("</code></pre>\n")
            case BlockQuote():
                sb.append(f"<blockquote{format_attributes({}, block.properties)}>\n")
                for child in block.children:
                    self._render_block(child, sb)
                sb.append("</blockquote>\n")
            case List():
                self._render_list(block, sb)
            case ThematicBreak():
                sb.append(f"<hr{format_attributes({}, block.properties)} />\n")
            case Table():
                self._render_table(block, sb)
            case Document():
                for child in block.children:
                    self._render_block(child, sb)
            case ListItem():
                self._render_list_item(block, sb, tight=True)
            case AttributeBlock():
                raise RenderError(
                    f"Unresolved attribute block at {block.location}; "
                    "run resolve_attributes() before rendering"
                )

    def _render_fenced_code(self, code: FencedCode, sb: StringBuilder) -> None:
        """Render fenced code block."""
        # CommonMark: decode HTML entities in the info string
        lang = html.unescape(code.language) if code.language else None
        intrinsic = {"class": f"language-{lang}"} if lang else {}
        sb.append(f"<pre><code{format_attributes(intrinsic, code.properties, merge_class=True)}>")
        sb.append(html_escape(code.code))
        sb.append("</code></pre>\n")

    def _render_list(self, lst: List, sb: StringBuilder) -> None:
        """Render ordered or unordered list."""
        if lst.ordered:
            intrinsic = {"start": str(lst.start)} if lst.start != 1 else {}
            sb.append(f"<ol{format_attributes(intrinsic, lst.properties)}>\n")
        else:
            sb.append(f"<ul{format_attributes({}, lst.properties)}>\n")

        for item in lst.items:
            self._render_list_item(item, sb, tight=lst.tight)

        sb.append("</ol>\n" if lst.ordered else "</ul>\n")

    def _render_list_item(self, item: ListItem, sb: StringBuilder, *, tight: bool) -> None:
        """Render list item.

        CommonMark:
        - Tight lists: paragraphs render as bare text (no <p> tags)
        - Loose lists: all paragraphs wrapped in <p> tags
        """
        sb.append("<li>")
        children = item.children
        if not children:
            pass
        elif tight:
            if not isinstance(children[0], Paragraph):
                sb.append("\n")
            for i, child in enumerate(children):
                if isinstance(child, Paragraph) and not child.properties:
                    self._render_inlines(child.children, sb)
                    if i < len(children) - 1:
                        sb.append("\n")
                else:
                    self._render_block(child, sb)
        else:
            sb.append("\n")
            for child in children:
                self._render_block(child, sb)
        sb.append("</li>\n")

    def _render_table(self, table: Table, sb: StringBuilder) -> None:
        """Render GFM-style table."""
        sb.append(f"<table{format_attributes({}, table.properties)}>\n")
        sb.append("<thead>\n")
        for row in table.head:
            self._render_table_row(row, sb)
        sb.append("</thead>\n")

        if table.body:
            sb.append("<tbody>\n")
            for row in table.body:
                self._render_table_row(row, sb)
            sb.append("</tbody>\n")

        sb.append("</table>\n")

    def _render_table_row(self, row: TableRow, sb: StringBuilder) -> None:
        """Render table row."""
        sb.append("<tr>\n")
        tag = "th" if row.is_header else "td"
        for cell in row.cells:
            style = f' style="text-align: {cell.align}"' if cell.align else ""
            sb.append(f"<{tag}{style}>")
            self._render_inlines(cell.children, sb)
            sb.append(f"</{tag}>\n")
        sb.append("</tr>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Inline, ...], sb: StringBuilder) -> None:
        """Render a sequence of inline nodes."""
        for inline in inlines:
            self._render_inline(inline, sb)

    def _render_inline(self, inline: Inline, sb: StringBuilder) -> None:
        """Render an inline node."""
        match inline:
            case Text():
                sb.append(html_escape(inline.content))
            case Emphasis():
                self._render_wrapped("em", inline.children, inline.properties, sb)
            case Strong():
                self._render_wrapped("strong", inline.children, inline.properties, sb)
            case Strikethrough():
                self._render_wrapped("del", inline.children, inline.properties, sb)
            case Link() | LinkReference():
                intrinsic = {"href": _encode_url(inline.url)}
                if inline.title:
                    intrinsic["title"] = html.unescape(inline.title)
                self._render_wrapped("a", inline.children, inline.properties, sb, intrinsic)
            case Image():
                intrinsic = {"src": _encode_url(inline.url), "alt": inline.alt}
                if inline.title:
                    intrinsic["title"] = html.unescape(inline.title)
                sb.append(f"<img{format_attributes(intrinsic, inline.properties)} />")
            case CodeSpan():
                sb.append(f"<code{format_attributes({}, inline.properties)}>")
                sb.append(html_escape(inline.code))
                sb.append("</code>")
            case LineBreak():
                sb.append("<br />\n")
            case SoftBreak():
                sb.append("\n")
            case AttributeInline():
                raise RenderError(
                    f"Unresolved inline attributes at {inline.location}; "
                    "run resolve_attributes() before rendering"
                )

    def _render_wrapped(
        self,
        tag: str,
        children: tuple[Inline, ...],
        properties: Mapping[str, str] | None,
        sb: StringBuilder,
        intrinsic: Mapping[str, str] | None = None,
    ) -> None:
        sb.append(f"<{tag}{format_attributes(intrinsic or {}, properties)}>")
        self._render_inlines(children, sb)
        sb.append(f"</{tag}>")
