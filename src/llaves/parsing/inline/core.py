"""Core inline parsing for the llaves parser.

Tokenizes inline text into finished nodes and delimiter runs, then runs
emphasis processing over the list.

Thread Safety:
All methods are stateless or use call-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from llaves.attributes.lexer import AttributeSite, scan_attributes
from llaves.nodes import AttributeInline, CodeSpan, Inline, LineBreak, SoftBreak, Text
from llaves.parsing.charsets import ASCII_PUNCTUATION, INLINE_SPECIAL
from llaves.parsing.inline.tokens import DelimiterRun, InlineItem

if TYPE_CHECKING:
    from llaves.location import SourceLocation
    from llaves.nodes import Image, Link, LinkReference


class InlineParsingCoreMixin:
    """Core inline parsing methods.

    Required Host Attributes:
        - _strikethrough_enabled: bool
        - _attributes_enabled: bool

    Required Host Methods (from other mixins):
        - _make_delimiter_run(char, count, before, after) -> DelimiterRun
        - _process_emphasis(items, location) -> None
        - _finish_inline(items, location) -> tuple[Inline, ...]
        - _try_parse_link(text, pos, location) -> tuple | None
        - _try_parse_image(text, pos, location) -> tuple | None
        - _try_parse_autolink(text, pos, location) -> tuple | None

    """

    _strikethrough_enabled: bool
    _attributes_enabled: bool

    def _parse_inline(self, text: str, location: SourceLocation) -> tuple[Inline, ...]:
        """Parse inline content into a tuple of Inline nodes.

        Example:
            >>> parser._parse_inline("**bold**{.x}", loc)
            (Strong(...), AttributeInline(attributes={'class': 'x'}, ...))

        """
        if not text:
            return ()
        items = self._tokenize_inline(text, location)
        self._process_emphasis(items, location)  # type: ignore[attr-defined]
        return self._finish_inline(items, location)  # type: ignore[attr-defined]

    def _tokenize_inline(self, text: str, location: SourceLocation) -> list[InlineItem]:
        """Split inline text into nodes and delimiter runs."""
        items: list[InlineItem] = []
        append = items.append
        pos = 0
        text_len = len(text)

        while pos < text_len:
            char = text[pos]

            # Code span first: its content is never parsed further
            if char == "`":
                end = pos
                while end < text_len and text[end] == "`":
                    end += 1
                run = end - pos
                close = self._find_code_span_close(text, end, run)
                if close == -1:
                    append(Text(location=location, content="`" * run))
                    pos = end
                    continue
                code = text[end:close].replace("\n", " ")
                if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip():
                    code = code[1:-1]
                append(CodeSpan(location=location, code=code))
                pos = close + run
                continue

            if char in "*_":
                end = pos
                while end < text_len and text[end] == char:
                    end += 1
                before = text[pos - 1] if pos > 0 else ""
                after = text[end] if end < text_len else ""
                append(self._make_delimiter_run(char, end - pos, before, after))  # type: ignore[attr-defined]
                pos = end
                continue

            if char == "~":
                end = pos
                while end < text_len and text[end] == "~":
                    end += 1
                if self._strikethrough_enabled and end - pos == 2:
                    before = text[pos - 1] if pos > 0 else ""
                    after = text[end] if end < text_len else ""
                    append(self._make_delimiter_run("~", 2, before, after))  # type: ignore[attr-defined]
                else:
                    append(Text(location=location, content=text[pos:end]))
                pos = end
                continue

            if char == "{":
                scan = scan_attributes(text, pos, AttributeSite.INLINE) if self._attributes_enabled else None
                if scan is not None:
                    append(AttributeInline(location=location, attributes=scan.attributes))
                    pos = scan.end
                else:
                    append(Text(location=location, content="{"))
                    pos += 1
                continue

            if char == "[":
                link = self._try_parse_link(text, pos, location)  # type: ignore[attr-defined]
                pos = self._append_node_or_text(items, link, "[", pos, location)
                continue

            if char == "!":
                image = self._try_parse_image(text, pos, location)  # type: ignore[attr-defined]
                pos = self._append_node_or_text(items, image, "!", pos, location)
                continue

            if char == "<":
                autolink = self._try_parse_autolink(text, pos, location)  # type: ignore[attr-defined]
                pos = self._append_node_or_text(items, autolink, "<", pos, location)
                continue

            if char == "\n":
                pos = self._append_line_break(items, text, pos, location)
                continue

            if char == "\\":
                next_char = text[pos + 1] if pos + 1 < text_len else ""
                if next_char == "\n":
                    append(LineBreak(location=location))
                    pos = self._skip_spaces(text, pos + 2)
                elif next_char and next_char in ASCII_PUNCTUATION:
                    append(Text(location=location, content=next_char))
                    pos += 2
                else:
                    append(Text(location=location, content="\\"))
                    pos += 1
                continue

            if char == "&":
                entity = self._try_parse_entity(text, pos)
                if entity is not None:
                    decoded, pos = entity
                    append(Text(location=location, content=decoded))
                else:
                    append(Text(location=location, content="&"))
                    pos += 1
                continue

            # Plain text up to the next special character
            start = pos
            pos += 1
            while pos < text_len and text[pos] not in INLINE_SPECIAL:
                pos += 1
            append(Text(location=location, content=text[start:pos]))

        return items

    def _append_node_or_text(
        self,
        items: list[InlineItem],
        result: tuple[Link | LinkReference | Image, int] | None,
        literal: str,
        pos: int,
        location: SourceLocation,
    ) -> int:
        if result is None:
            items.append(Text(location=location, content=literal))
            return pos + 1
        node, end = result
        items.append(node)
        return end

    def _append_line_break(
        self, items: list[InlineItem], text: str, pos: int, location: SourceLocation
    ) -> int:
        """Handle a newline: hard break after 2+ spaces, soft break otherwise."""
        spaces = 0
        while pos - spaces - 1 >= 0 and text[pos - spaces - 1] == " ":
            spaces += 1

        if spaces and items and isinstance(items[-1], Text):
            trimmed = items[-1].content.rstrip(" ")
            if trimmed:
                items[-1] = Text(location=location, content=trimmed)
            else:
                items.pop()

        if spaces >= 2:
            items.append(LineBreak(location=location))
        else:
            items.append(SoftBreak(location=location))
        return self._skip_spaces(text, pos + 1)

    def _skip_spaces(self, text: str, pos: int) -> int:
        while pos < len(text) and text[pos] == " ":
            pos += 1
        return pos

    def _find_code_span_close(self, text: str, start: int, run: int) -> int:
        """Find a closing backtick run of exactly ``run`` characters."""
        pos = start
        text_len = len(text)
        while True:
            idx = text.find("`", pos)
            if idx == -1:
                return -1
            end = idx
            while end < text_len and text[end] == "`":
                end += 1
            if end - idx == run:
                return idx
            pos = end

    def _try_parse_entity(self, text: str, pos: int) -> tuple[str, int] | None:
        """Decode ``&name;``, ``&#123;`` or ``&#x1F;`` at position.

        Returns:
            (decoded, new_position) or None when the reference is not valid.
        """
        semicolon = text.find(";", pos + 1, pos + 34)
        if semicolon == -1:
            return None

        body = text[pos + 1 : semicolon]
        if body.startswith(("#x", "#X")):
            digits = body[2:]
            valid = 1 <= len(digits) <= 6 and all(c in "0123456789abcdefABCDEF" for c in digits)
        elif body.startswith("#"):
            digits = body[1:]
            valid = 1 <= len(digits) <= 7 and digits.isdigit()
        else:
            valid = body.isalnum() and body[:1].isalpha()
        if not valid:
            return None

        entity = text[pos : semicolon + 1]
        decoded = html.unescape(entity)
        if decoded == entity:
            return None
        return decoded, semicolon + 1
