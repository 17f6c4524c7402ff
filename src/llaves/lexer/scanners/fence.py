"""Fenced code mode scanner mixin."""

from llaves.lexer.modes import LexerMode
from llaves.tokens import Token, TokenType


class FenceScannerMixin:
    """Mixin providing fenced code mode scanning logic.

    Emits one FENCED_CODE_CONTENT token per line until the closing fence.

    """

    _source: str
    _mode: LexerMode
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _consumed_newline: bool

    def _begin_line(self) -> tuple[int, int]:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        line_indent: int = -1,
    ) -> Token:
        raise NotImplementedError

    def _is_closing_fence(self, line: str) -> bool:
        raise NotImplementedError

    def _strip_indent(self, line: str, columns: int) -> str:
        raise NotImplementedError

    def _scan_code_fence_content(self) -> Token:
        """Scan one line inside a fenced code block."""
        line_start, line_end = self._begin_line()
        line = self._source[line_start:line_end]
        self._commit_to(line_end)

        if self._is_closing_fence(line):
            fence = self._fence_char * self._fence_count
            self._mode = LexerMode.BLOCK
            self._fence_char = ""
            self._fence_count = 0
            self._fence_indent = 0
            return self._make_token(TokenType.FENCED_CODE_END, fence, line_start, line_indent=0)

        # Content keeps its newline; the opening fence's indent is removed
        content = self._strip_indent(line, self._fence_indent)
        if self._consumed_newline:
            content += "\n"
        return self._make_token(TokenType.FENCED_CODE_CONTENT, content, line_start, line_indent=0)
