"""Line-classifying lexer with O(n) performance.

Uses a window-based approach: find the end of the current line, classify
it, then commit past it. Every call advances by exactly one line, so the
lexer always terminates and never rewinds.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from llaves.lexer.classifiers import (
    AttributeClassifierMixin,
    FenceClassifierMixin,
    HeadingClassifierMixin,
    LinkRefClassifierMixin,
    ListClassifierMixin,
    QuoteClassifierMixin,
    ThematicClassifierMixin,
)
from llaves.lexer.modes import LexerMode
from llaves.lexer.scanners import BlockScannerMixin, FenceScannerMixin
from llaves.tokens import Token, TokenType


class Lexer(
    # Classifiers (pure logic, no position mutation)
    HeadingClassifierMixin,
    FenceClassifierMixin,
    ThematicClassifierMixin,
    QuoteClassifierMixin,
    ListClassifierMixin,
    LinkRefClassifierMixin,
    AttributeClassifierMixin,
    # Scanners (mode-specific scanning logic)
    BlockScannerMixin,
    FenceScannerMixin,
):
    """Line-classifying lexer.

    Emits one token per source line followed by a single EOF token.

    Usage:
            >>> lexer = Lexer("# Hello\n\nWorld")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(ATX_HEADING, '# Hello', 1:1)
        Token(BLANK_LINE, '', 2:1)
        Token(PARAGRAPH_LINE, 'World', 3:1)
        Token(EOF, '', 3:6)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_source_file",
        "_attributes_enabled",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
        "_consumed_newline",
        "_line_lineno",
        "_line_end",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        attributes_enabled: bool = True,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markdown source text (newlines already normalised to \\n)
            source_file: Optional source file path for error messages
            attributes_enabled: Recognize ``{...}`` attribute lines

        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = LexerMode.BLOCK
        self._source_file = source_file
        self._attributes_enabled = attributes_enabled

        self._fence_char = ""
        self._fence_count = 0
        self._fence_indent = 0

        self._consumed_newline = False
        self._line_lineno = 1
        self._line_end = 0

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            One token per line, then exactly one EOF token.
        """
        while self._pos < self._source_len:
            if self._mode == LexerMode.CODE_FENCE:
                yield self._scan_code_fence_content()
            else:
                yield self._scan_block()

        yield Token(
            type=TokenType.EOF,
            value="",
            _lineno=self._lineno,
            _col=self._col,
            _start_offset=self._pos,
            _end_offset=self._pos,
            line_indent=0,
            _source_file=self._source_file,
        )

    def seek(self, offset: int, lineno: int) -> None:
        """Restart scanning in block mode at a line boundary.

        Used by the parser when a container consumed lines that the lexer
        read in the wrong mode (a fence opened inside a list item).
        """
        self._pos = offset
        self._lineno = lineno
        self._col = 1
        self._mode = LexerMode.BLOCK
        self._fence_char = ""
        self._fence_count = 0
        self._fence_indent = 0

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _begin_line(self) -> tuple[int, int]:
        """Record the current line's start and return (start, end) offsets."""
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = self._source_len
        self._line_lineno = self._lineno
        self._line_end = end
        return self._pos, end

    def _commit_to(self, line_end: int) -> None:
        """Move past the line, consuming its newline if present."""
        self._consumed_newline = line_end < self._source_len
        if self._consumed_newline:
            self._pos = line_end + 1
            self._lineno += 1
            self._col = 1
        else:
            self._col += line_end - self._pos
            self._pos = line_end

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to the next multiple of 4.

        Returns:
            (indent_spaces, content_start_index)
        """
        indent = 0
        pos = 0
        while pos < len(line):
            char = line[pos]
            if char == " ":
                indent += 1
            elif char == "\t":
                indent += 4 - (indent % 4)
            else:
                break
            pos += 1
        return indent, pos

    def _strip_indent(self, line: str, columns: int) -> str:
        """Remove up to ``columns`` columns of leading whitespace.

        A tab that straddles the boundary leaves its remaining columns as
        spaces.
        """
        col = 0
        pos = 0
        while pos < len(line) and col < columns:
            char = line[pos]
            if char == " ":
                col += 1
            elif char == "\t":
                width = 4 - (col % 4)
                if col + width > columns:
                    return " " * (col + width - columns) + line[pos + 1 :]
                col += width
            else:
                break
            pos += 1
        return line[pos:]

    # =========================================================================
    # Token construction
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        line_indent: int = -1,
    ) -> Token:
        """Create a token spanning the current line (lazy SourceLocation)."""
        return Token(
            type=token_type,
            value=value,
            _lineno=self._line_lineno,
            _col=1,
            _start_offset=start_pos,
            _end_offset=self._line_end,
            line_indent=line_indent,
            _source_file=self._source_file,
        )
