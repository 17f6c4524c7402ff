"""Token navigation utilities for the llaves parser.

Provides mixin for token stream navigation and basic parsing operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llaves.lexer import Lexer
from llaves.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _pos: int
        - _current: Token | None
        - _source: str
        - _attributes_enabled: bool

    """

    _tokens: Sequence[Token]
    _pos: int
    _current: Token | None
    _source: str
    _attributes_enabled: bool

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < len(self._tokens):
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _raw_line(self, token: Token) -> str:
        """Original source line of a token, newline excluded."""
        return self._source[token._start_offset : token._end_offset]

    def _classify_line(self, line: str) -> Token:
        """Classify a detached line the way the lexer would at block level.

        An empty line yields the EOF token.
        """
        lexer = Lexer(line, attributes_enabled=self._attributes_enabled)
        return next(lexer.tokenize())

    def _resync_tokens(self) -> None:
        """Re-lex the rest of the source after a container consumed lines.

        A fence opened inside a container leaves the lexer in code mode past
        the container's end; those tokens are replaced by block tokens.
        """
        token = self._current
        if token is None or token.type not in (
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_END,
        ):
            return
        lexer = Lexer(self._source, token._source_file, attributes_enabled=self._attributes_enabled)
        lexer.seek(token._start_offset, token._lineno)
        self._tokens[self._pos :] = lexer.tokenize()  # type: ignore[index]
        self._current = self._tokens[self._pos]
