"""Recursive descent parser producing typed AST.

Consumes token stream from Lexer and builds typed AST nodes.
Produces immutable (frozen) dataclass nodes for thread-safety.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Inline content (emphasis, links, attribute brackets)
- `BlockParsingMixin`: Block-level content (paragraphs, lists, tables)

Attribute brackets are left in the tree as AttributeBlock and
AttributeInline placeholders. ``llaves.parse`` runs the attribute resolver
afterwards; callers using Parser directly must do the same before
rendering.

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from collections.abc import Sequence

from llaves.config import ParseConfig, get_parse_config
from llaves.errors import ParseError
from llaves.lexer import Lexer
from llaves.lexer.classifiers.link_ref import LINK_REF_SEPARATOR
from llaves.location import SourceLocation
from llaves.nodes import Block
from llaves.parsing.blocks import BlockParsingMixin
from llaves.parsing.inline import InlineParsingMixin
from llaves.parsing.inline.links import _normalize_label, _process_escapes
from llaves.parsing.token_nav import TokenNavigationMixin
from llaves.tokens import Token, TokenType
from llaves.utils.logger import get_logger

logger = get_logger(__name__)

# Token types that close an open paragraph for link definition purposes
_PARAGRAPH_BREAKERS = frozenset(
    {
        TokenType.BLANK_LINE,
        TokenType.ATX_HEADING,
        TokenType.THEMATIC_BREAK,
        TokenType.FENCED_CODE_START,
        TokenType.BLOCK_QUOTE_MARKER,
        TokenType.LIST_ITEM_MARKER,
        TokenType.ATTRIBUTE_BLOCK,
    }
)


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for Markdown.

    Consumes tokens from Lexer and builds typed AST.

    Usage:
            >>> parser = Parser("# Hello {#top}\n\nWorld")
            >>> blocks = parser.parse()
            >>> blocks[0]
        Heading(level=1, children=(Text(content='Hello '), AttributeInline(...)), ...)

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).
        The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_tokens",
        "_pos",
        "_current",
        "_source_file",
        # Link reference definitions (per-document state)
        "_link_refs",
        # Setext heading control - disabled for blockquote lazy continuation content
        "_allow_setext_headings",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Markdown source text; CRLF and CR line endings are
                normalised to LF
            source_file: Optional source file path for error messages

        Raises:
            ParseError: If source is not a string

        """
        if not isinstance(source, str):
            raise ParseError(
                f"source must be a string, got {type(source).__name__}",
                source_file=source_file,
            )
        self._source = source.replace("\r\n", "\n").replace("\r", "\n")
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._pos = 0
        self._current: Token | None = None

        # Link reference definitions: normalized label -> (url, title)
        self._link_refs: dict[str, tuple[str, str]] = {}

        self._allow_setext_headings = True

    # =========================================================================
    # Configuration Properties (read from ContextVar)
    # =========================================================================

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def _tables_enabled(self) -> bool:
        """Whether GFM table parsing is enabled."""
        return self._config.tables_enabled

    @property
    def _strikethrough_enabled(self) -> bool:
        """Whether ~~strikethrough~~ syntax is enabled."""
        return self._config.strikethrough_enabled

    @property
    def _attributes_enabled(self) -> bool:
        """Whether {...} attribute brackets are recognised."""
        return self._config.attributes_enabled

    def parse(self) -> Sequence[Block]:
        """Parse source into AST blocks.

        Returns:
            Sequence of Block nodes, placeholders included

        Thread Safety:
            Returns immutable AST (frozen dataclasses).
        """
        lexer = Lexer(self._source, self._source_file, attributes_enabled=self._attributes_enabled)
        self._tokens = list(lexer.tokenize())
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None

        # First pass: definitions must be known before inline parsing
        self._collect_link_refs()

        blocks: list[Block] = []
        while not self._at_end():
            block = self._parse_block()
            if block is not None:
                blocks.append(block)

        return tuple(blocks)

    def _collect_link_refs(self) -> None:
        """Record link reference definitions that are not inside a paragraph.

        When a label is defined twice, the first definition is used.
        """
        in_paragraph = False

        for token in self._tokens:
            if token.type == TokenType.LINK_REFERENCE_DEF:
                if not in_paragraph:
                    raw_label, url, title = token.value.split(LINK_REF_SEPARATOR, 2)
                    label = _normalize_label(raw_label)
                    if label in self._link_refs:
                        logger.debug("Duplicate link reference %r ignored", raw_label)
                    else:
                        self._link_refs[label] = (_process_escapes(url), _process_escapes(title))
            elif token.type in (TokenType.PARAGRAPH_LINE, TokenType.INDENTED_CODE):
                in_paragraph = in_paragraph or token.type == TokenType.PARAGRAPH_LINE
            elif token.type in _PARAGRAPH_BREAKERS:
                in_paragraph = False

    def _parse_nested_content(
        self,
        content: str,
        location: SourceLocation,
        *,
        allow_setext_headings: bool = True,
    ) -> tuple[Block, ...]:
        """Parse nested content as blocks (for block quotes, list items).

        Creates a sub-parser to handle nested block-level content.
        Configuration is inherited via ContextVar.

        Args:
            content: The markdown content to parse as blocks
            location: Source location of the container
            allow_setext_headings: If False, disable setext heading detection
                (used for blockquote content with lazy continuation lines)

        Returns:
            Tuple of Block nodes

        """
        if not content.strip():
            return ()

        sub_parser = Parser(content, self._source_file)
        sub_parser._allow_setext_headings = allow_setext_headings
        # Share link reference definitions (document-wide state)
        sub_parser._link_refs = self._link_refs
        return tuple(sub_parser.parse())
