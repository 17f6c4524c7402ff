"""
llaves: Markdown attribute brackets for a typed Markdown AST

Adds the ``{#id .class key="value"}`` syntax to a CommonMark-style parser.
A bracket after an inline node, at the end of a heading, on the line after
a block, or in a fenced code block's info string becomes HTML attributes on
that node. Zero runtime dependencies.

Quick Start:
    >>> from llaves import parse, render
    >>> doc = parse("# Intro {#top}\\n\\n**bold**{.highlight}")
    >>> print(render(doc))
    <h1 id="top">Intro</h1>
    <p><strong class="highlight">bold</strong></p>

    >>> # Or use the high-level Markdown class
    >>> from llaves import Markdown
    >>> md = Markdown(plugins=["table"], attributes={"scope": "permissive"})
    >>> html = md("text{data-x=1}")

Attribute options:
    scope                  none | global | specific | extended | permissive | every
    extend                 extra names per node type or tag, e.g. {"image": ["loading"]}
    allow_dangerous_handlers  keep on* event handler attributes
    enable_heading_inline  let a trailing bracket in a heading target the heading
    disable_block          keep bracket lines as literal paragraphs

"""

from collections.abc import Iterable, Mapping
from typing import Any

from llaves.attributes import resolve_attributes
from llaves.config import (
    AttributeOptions,
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from llaves.errors import (
    ConfigError,
    LlavesError,
    ParseError,
    PluginError,
    RenderError,
)
from llaves.lexer import Lexer
from llaves.location import SourceLocation
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
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Target,
    Text,
    ThematicBreak,
)
from llaves.parser import Parser
from llaves.plugins import plugin_flags, resolve_plugins
from llaves.renderers.html import HtmlRenderer
from llaves.tokens import Token, TokenType
from llaves.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def _parse_document(source: str, source_file: str | None, config: ParseConfig) -> Document:
    """Parse under the active config and resolve attribute placeholders."""
    blocks = Parser(source, source_file=source_file).parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    doc = Document(location=loc, children=tuple(blocks))
    if not config.attributes_enabled:
        return doc
    return resolve_attributes(doc, config.attribute_options)


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Markdown source into a typed AST with attributes attached.

    Args:
        source: Markdown source text
        source_file: Optional source file path for error messages
        config: Parse configuration; defaults to the active context's config

    Returns:
        Document AST root node, free of attribute placeholders

    Example:
        >>> doc = parse("# Hello {.title}")
        >>> doc.children[0].properties
        {'class': 'title'}

    """
    if config is None:
        return _parse_document(source, source_file, get_parse_config())
    with parse_config_context(config):
        return _parse_document(source, source_file, config)


def render(doc: Document) -> str:
    """Render an AST Document to HTML.

    Args:
        doc: Document AST to render

    Returns:
        HTML string

    Example:
        >>> print(render(parse("*hi*{lang=en}")))
        <p><em lang="en">hi</em></p>

    """
    return HtmlRenderer().render(doc)


class Markdown:
    """High-level Markdown processor combining parser and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("Hello **World**{.big}")
        '<p>Hello <strong class="big">World</strong></p>\\n'

        >>> # Access the AST
        >>> doc = md.parse("# Heading {#h}")
        >>> doc.children[0].properties
        {'id': 'h'}

        >>> # Restrict attributes to global HTML attributes
        >>> md = Markdown(attributes={"scope": "global"})

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_plugins", "_renderer")

    def __init__(
        self,
        *,
        plugins: Iterable[str] | None = None,
        attributes: AttributeOptions | Mapping[str, Any] | None = None,
        attributes_enabled: bool = True,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            plugins: Plugin names to enable ("table", "strikethrough").
                Use ["all"] to enable all built-in plugins.
            attributes: AttributeOptions, or a mapping accepted by
                AttributeOptions.from_dict
            attributes_enabled: Recognise attribute brackets at all

        Raises:
            PluginError: If a plugin name is unknown
            ConfigError: If the attribute options are invalid

        """
        self._plugins = resolve_plugins(plugins)

        if attributes is None:
            options = AttributeOptions()
        elif isinstance(attributes, AttributeOptions):
            options = attributes
        elif isinstance(attributes, Mapping):
            options = AttributeOptions.from_dict(attributes)
        else:
            raise ConfigError(
                "attributes",
                f"expected a mapping or AttributeOptions, got {type(attributes).__name__}",
            )

        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig(
            **plugin_flags(self._plugins),
            attributes_enabled=attributes_enabled,
            attribute_options=options,
        )
        self._renderer = HtmlRenderer()

    @property
    def config(self) -> ParseConfig:
        """The parse configuration used by this instance."""
        return self._config

    @property
    def plugins(self) -> tuple[str, ...]:
        """Enabled plugin names."""
        return self._plugins

    def __call__(self, source: str) -> str:
        """Parse and render Markdown in one call.

        Args:
            source: Markdown source text

        Returns:
            HTML string

        """
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into AST with attributes attached.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        Returns:
            Document AST root node

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return _parse_document(source, source_file, self._config)

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple Markdown sources into AST documents.

        Sets config once, parses all, restores once.

        Example:
            >>> md = Markdown()
            >>> docs = md.parse_many(["# Doc 1 {#one}", "# Doc 2 {#two}"])
        """
        with parse_config_context(self._config):
            return [_parse_document(source, source_file, self._config) for source in sources]

    def render(self, doc: Document) -> str:
        """Render AST to HTML."""
        return self._renderer.render(doc)


__all__ = [
    # High-level API
    "Markdown",
    "parse",
    "render",
    "resolve_attributes",
    # Configuration
    "AttributeOptions",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Low-level
    "Lexer",
    "Parser",
    "HtmlRenderer",
    "Token",
    "TokenType",
    "SourceLocation",
    # AST traversal
    "BaseVisitor",
    "transform",
    # Errors
    "LlavesError",
    "ParseError",
    "ConfigError",
    "RenderError",
    "PluginError",
    # Nodes
    "Node",
    "Block",
    "Inline",
    "Target",
    "Document",
    "Heading",
    "Paragraph",
    "FencedCode",
    "IndentedCode",
    "BlockQuote",
    "List",
    "ListItem",
    "ThematicBreak",
    "Table",
    "TableRow",
    "TableCell",
    "AttributeBlock",
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Link",
    "LinkReference",
    "Image",
    "CodeSpan",
    "LineBreak",
    "SoftBreak",
    "AttributeInline",
    "__version__",
]
