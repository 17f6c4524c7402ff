"""Block mode scanner mixin."""

from __future__ import annotations

from llaves.parsing.charsets import FENCE_CHARS, THEMATIC_BREAK_CHARS
from llaves.tokens import Token, TokenType


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Classifies one line per call:
    1. Find end of current line (window)
    2. Classify the line content (pure logic)
    3. Commit position (always advances)

    """

    _source: str
    _pos: int

    def _begin_line(self) -> tuple[int, int]:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
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

    def _strip_indent(self, line: str, columns: int) -> str:
        raise NotImplementedError

    def _scan_block(self) -> Token:
        """Classify the current line and advance past it."""
        line_start, line_end = self._begin_line()
        line = self._source[line_start:line_end]
        self._commit_to(line_end)

        indent, content_start = self._calc_indent(line)
        content = line[content_start:]

        if not content or content.isspace():
            return self._make_token(TokenType.BLANK_LINE, "", line_start, line_indent=0)

        if indent >= 4:
            return self._make_token(
                TokenType.INDENTED_CODE,
                self._strip_indent(line, 4),
                line_start,
                line_indent=indent,
            )

        first = content[0]
        token: Token | None = None

        if first in FENCE_CHARS:
            token = self._try_classify_fence_start(content, line_start, indent)  # type: ignore[attr-defined]
        elif first == "#":
            token = self._try_classify_atx_heading(content, line_start, indent)  # type: ignore[attr-defined]
        elif first == ">":
            token = self._classify_block_quote(content, line_start, indent)  # type: ignore[attr-defined]
        elif first == "{":
            token = self._try_classify_attribute_line(content, line_start, indent)  # type: ignore[attr-defined]
        elif first == "[":
            token = self._try_classify_link_reference_def(content, line_start, indent)  # type: ignore[attr-defined]

        if token is None and first in THEMATIC_BREAK_CHARS:
            token = self._try_classify_thematic_break(content, line_start, indent)  # type: ignore[attr-defined]

        if token is None:
            token = self._try_classify_list_marker(content, line_start, indent)  # type: ignore[attr-defined]

        if token is None:
            token = self._make_token(
                TokenType.PARAGRAPH_LINE, content, line_start, line_indent=indent
            )
        return token
