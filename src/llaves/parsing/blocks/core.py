"""Core block parsing for the llaves parser.

Handles headings, code blocks, block quotes, thematic breaks, paragraphs
and attribute lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llaves.attributes.lexer import AttributeSite, scan_attributes
from llaves.nodes import (
    AttributeBlock,
    Block,
    BlockQuote,
    FencedCode,
    Heading,
    IndentedCode,
    Paragraph,
    Table,
    ThematicBreak,
)
from llaves.tokens import TokenType

if TYPE_CHECKING:
    from llaves.nodes import Inline


class BlockParsingCoreMixin:
    """Core block parsing methods.

    Required Host Attributes:
        - _source: str
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None
        - _tables_enabled: bool
        - _allow_setext_headings: bool

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _raw_line(token) -> str
        - _classify_line(line) -> Token
        - _parse_inline(text, location) -> tuple[Inline, ...]
        - _parse_nested_content(content, location, ...) -> tuple[Block, ...]
        - _parse_list() -> List
        - _list_can_interrupt(token) -> bool
        - _try_parse_table(lines, location) -> Table | None

    """

    def _parse_block(self) -> Block | None:
        """Parse a single block element."""
        if self._at_end():  # type: ignore[attr-defined]
            return None

        token = self._current  # type: ignore[attr-defined]
        assert token is not None

        match token.type:
            case TokenType.BLANK_LINE:
                self._advance()  # type: ignore[attr-defined]
                return None

            case TokenType.ATX_HEADING:
                return self._parse_atx_heading()

            case TokenType.FENCED_CODE_START:
                return self._parse_fenced_code()

            case TokenType.THEMATIC_BREAK:
                self._advance()  # type: ignore[attr-defined]
                return ThematicBreak(location=token.location)

            case TokenType.BLOCK_QUOTE_MARKER:
                return self._parse_block_quote()

            case TokenType.LIST_ITEM_MARKER:
                return self._parse_list()  # type: ignore[attr-defined]

            case TokenType.INDENTED_CODE:
                return self._parse_indented_code()

            case TokenType.PARAGRAPH_LINE:
                return self._parse_paragraph()

            case TokenType.ATTRIBUTE_BLOCK:
                return self._parse_attribute_block()

            case TokenType.LINK_REFERENCE_DEF:
                # Collected in the first pass; no node of their own
                self._advance()  # type: ignore[attr-defined]
                return None

            case _:
                self._advance()  # type: ignore[attr-defined]
                return None

    def _parse_atx_heading(self) -> Heading:
        """Parse ATX heading (# Heading {#id}).

        A trailing attribute bracket stays in the inline children; the
        attribute resolver moves it onto the heading.
        """
        token = self._current  # type: ignore[attr-defined]
        assert token is not None and token.type == TokenType.ATX_HEADING
        self._advance()  # type: ignore[attr-defined]

        value = token.value
        level = len(value) - len(value.lstrip("#"))
        content = value[level:].strip()

        return Heading(
            location=token.location,
            level=level,  # type: ignore[arg-type]
            children=self._parse_inline(content, token.location),  # type: ignore[attr-defined]
            style="atx",
        )

    def _parse_fenced_code(self) -> FencedCode:
        """Parse a fenced code block up to its closing fence or end of input."""
        start_token = self._current  # type: ignore[attr-defined]
        assert start_token is not None and start_token.type == TokenType.FENCED_CODE_START
        self._advance()  # type: ignore[attr-defined]

        # Value format: I{indent}:{fence}{info}
        _, _, fence_and_info = start_token.value.partition(":")
        marker = fence_and_info[0]
        info = fence_and_info.lstrip(marker).strip()

        parts: list[str] = []
        while not self._at_end():  # type: ignore[attr-defined]
            token = self._current  # type: ignore[attr-defined]
            assert token is not None
            if token.type == TokenType.FENCED_CODE_END:
                self._advance()  # type: ignore[attr-defined]
                break
            if token.type != TokenType.FENCED_CODE_CONTENT:
                break
            parts.append(token.value)
            self._advance()  # type: ignore[attr-defined]

        code = "".join(parts)
        if code and not code.endswith("\n"):
            code += "\n"

        return FencedCode(
            location=start_token.location,
            code=code,
            info=info or None,
            marker=marker,  # type: ignore[arg-type]
        )

    def _parse_indented_code(self) -> IndentedCode:
        """Parse indented code block.

        Blank lines between code lines belong to the block; leading and
        trailing blank lines do not.
        """
        start_token = self._current  # type: ignore[attr-defined]
        assert start_token is not None and start_token.type == TokenType.INDENTED_CODE

        lines: list[str] = []
        pending_blanks: list[str] = []
        while not self._at_end():  # type: ignore[attr-defined]
            token = self._current  # type: ignore[attr-defined]
            assert token is not None
            if token.type == TokenType.INDENTED_CODE:
                lines.extend(pending_blanks)
                pending_blanks = []
                lines.append(token.value)
            elif token.type == TokenType.BLANK_LINE:
                # Whitespace beyond the code indent is preserved
                raw = self._raw_line(token)  # type: ignore[attr-defined]
                pending_blanks.append(raw.expandtabs(4)[4:])
            else:
                break
            self._advance()  # type: ignore[attr-defined]

        # Trailing blank lines were consumed but are not part of the code
        return IndentedCode(location=start_token.location, code="\n".join(lines) + "\n")

    def _parse_block_quote(self) -> BlockQuote:
        """Parse a block quote, including lazy continuation lines.

        Lines are collected with their ``>`` marker removed and parsed again
        as a nested document.
        """
        start_token = self._current  # type: ignore[attr-defined]
        assert start_token is not None and start_token.type == TokenType.BLOCK_QUOTE_MARKER

        lines: list[str] = [start_token.value]
        lazy = False
        self._advance()  # type: ignore[attr-defined]

        while not self._at_end():  # type: ignore[attr-defined]
            token = self._current  # type: ignore[attr-defined]
            assert token is not None
            raw = self._raw_line(token)  # type: ignore[attr-defined]
            if not raw.strip():
                break

            line_token = self._classify_line(raw)  # type: ignore[attr-defined]
            if line_token.type == TokenType.BLOCK_QUOTE_MARKER:
                lines.append(line_token.value)
            elif line_token.type == TokenType.PARAGRAPH_LINE and self._ends_in_paragraph(lines):
                lines.append(line_token.value)
                lazy = True
            else:
                break
            self._advance()  # type: ignore[attr-defined]

        self._resync_tokens()  # type: ignore[attr-defined]
        children = self._parse_nested_content(  # type: ignore[attr-defined]
            "\n".join(lines),
            start_token.location,
            allow_setext_headings=not lazy,
        )
        return BlockQuote(location=start_token.location, children=children)

    def _ends_in_paragraph(self, lines: list[str]) -> bool:
        """Whether collected container lines end inside an open paragraph.

        Quote and list markers are looked through, so ``> > text`` and
        ``- text`` count.
        """
        line = lines[-1] if lines else ""
        while line.strip():
            token = self._classify_line(line)  # type: ignore[attr-defined]
            match token.type:
                case TokenType.PARAGRAPH_LINE:
                    return True
                case TokenType.BLOCK_QUOTE_MARKER:
                    line = token.value
                case TokenType.LIST_ITEM_MARKER:
                    col = int(token.value.partition(":")[0])
                    line = line.expandtabs(4)[col:]
                case _:
                    return False
        return False

    def _parse_attribute_block(self) -> AttributeBlock | Paragraph:
        """Parse a line holding only an attribute bracket."""
        token = self._current  # type: ignore[attr-defined]
        assert token is not None and token.type == TokenType.ATTRIBUTE_BLOCK
        self._advance()  # type: ignore[attr-defined]

        scan = scan_attributes(token.value, 0, AttributeSite.BLOCK)
        if scan is None:
            return Paragraph(
                location=token.location,
                children=self._parse_inline(token.value, token.location),  # type: ignore[attr-defined]
            )
        return AttributeBlock(location=token.location, attributes=scan.attributes)

    def _parse_paragraph(self) -> Paragraph | Table | Heading:
        """Parse paragraph (consecutive text lines), table, or setext heading.

        If a line is a setext underline (=== or ---), returns Heading.
        If tables are enabled and lines form a valid GFM table, returns Table.
        Otherwise returns Paragraph.
        """
        start_token = self._current  # type: ignore[attr-defined]
        assert start_token is not None and start_token.type == TokenType.PARAGRAPH_LINE
        location = start_token.location
        allow_setext = self._allow_setext_headings  # type: ignore[attr-defined]

        lines: list[str] = []
        setext_level = 0

        while not self._at_end():  # type: ignore[attr-defined]
            token = self._current  # type: ignore[attr-defined]
            assert token is not None
            token_type = token.type

            if token_type == TokenType.PARAGRAPH_LINE:
                underline = token.value.strip()[:1]
                if (
                    allow_setext
                    and lines
                    and underline in ("=", "-")
                    and self._is_setext_underline(token.value, underline)
                ):
                    setext_level = 1 if underline == "=" else 2
                    self._advance()  # type: ignore[attr-defined]
                    break
                lines.append(token.value)
            elif token_type == TokenType.THEMATIC_BREAK:
                if allow_setext and self._is_setext_underline(token.value, "-"):
                    setext_level = 2
                    self._advance()  # type: ignore[attr-defined]
                break
            elif token_type == TokenType.LIST_ITEM_MARKER:
                if self._list_can_interrupt(token):  # type: ignore[attr-defined]
                    break
                lines.append(self._raw_line(token).strip())  # type: ignore[attr-defined]
            elif token_type in (TokenType.INDENTED_CODE, TokenType.LINK_REFERENCE_DEF):
                # Neither can interrupt a paragraph
                lines.append(self._raw_line(token).strip())  # type: ignore[attr-defined]
            else:
                # Blank line, heading, fence, quote or attribute line
                break
            self._advance()  # type: ignore[attr-defined]

        if setext_level:
            text = "\n".join(line.rstrip() for line in lines)
            return Heading(
                location=location,
                level=setext_level,  # type: ignore[arg-type]
                children=self._parse_inline(text.strip(), location),  # type: ignore[attr-defined]
                style="setext",
            )

        if self._tables_enabled and len(lines) >= 2 and "|" in lines[0]:  # type: ignore[attr-defined]
            table = self._try_parse_table(lines, location)  # type: ignore[attr-defined]
            if table is not None:
                return table

        content = "\n".join(lines).rstrip()
        children: tuple[Inline, ...] = self._parse_inline(content, location)  # type: ignore[attr-defined]
        return Paragraph(location=location, children=children)

    def _is_setext_underline(self, line: str, char: str) -> bool:
        """Check if line is a setext underline made of ``char``.

        The lexer already removed up to three spaces of indent.
        """
        stripped = line.strip()
        return bool(stripped) and all(c == char for c in stripped)
