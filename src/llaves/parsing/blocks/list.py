"""List parsing for the llaves parser.

Each item's lines are collected with the item's content column removed and
parsed again as a nested document, so items can hold any block (nested
lists, code, quotes and attribute lines included).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from llaves.lexer.classifiers.list import is_ordered_marker
from llaves.nodes import List, ListItem
from llaves.tokens import TokenType

if TYPE_CHECKING:
    from llaves.tokens import Token


@dataclass(frozen=True, slots=True)
class ListMarkerInfo:
    """Information extracted from a list marker token.

    Attributes:
        ordered: Whether this is an ordered list (1. vs -)
        delimiter: Bullet character, or ``.``/``)`` for ordered lists
        start: Starting number for ordered lists
        content_col: Column where item content starts (tabs expanded)

    """

    ordered: bool
    delimiter: str
    start: int
    content_col: int

    @classmethod
    def from_token(cls, token: Token) -> ListMarkerInfo:
        # Value format: {content_col}:{marker}
        col, _, marker = token.value.partition(":")
        ordered = is_ordered_marker(marker)
        return cls(
            ordered=ordered,
            delimiter=marker[-1],
            start=int(marker[:-1]) if ordered else 1,
            content_col=int(col),
        )

    def same_list(self, other: ListMarkerInfo) -> bool:
        return self.ordered == other.ordered and self.delimiter == other.delimiter


@dataclass
class ListItemState:
    """Lines collected for one item while scanning."""

    lines: list[str] = field(default_factory=list)
    # A blank line followed by more content at the item's own level
    inner_gap: bool = False
    trailing_blanks: int = 0


class ListParsingMixin:
    """Mixin for list parsing.

    Handles nested lists, lazy continuation lines and loose/tight detection.

    Required Host Attributes:
        - _current: Token | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _raw_line(token) -> str
        - _classify_line(line) -> Token
        - _ends_in_paragraph(lines) -> bool
        - _resync_tokens() -> None
        - _parse_nested_content(content, location, ...) -> tuple[Block, ...]

    """

    def _list_can_interrupt(self, token: Token) -> bool:
        """Whether a list marker line may interrupt a paragraph.

        The item must not be empty, and an ordered list must start at 1.
        """
        info = ListMarkerInfo.from_token(token)
        raw = self._raw_line(token).expandtabs(4)  # type: ignore[attr-defined]
        if not raw[info.content_col :].strip():
            return False
        return not info.ordered or info.start == 1

    def _parse_list(self) -> List:
        """Parse consecutive items with the same marker type into a List."""
        start_token = self._current  # type: ignore[attr-defined]
        assert start_token is not None and start_token.type == TokenType.LIST_ITEM_MARKER
        first = ListMarkerInfo.from_token(start_token)

        items: list[ListItem] = []
        loose = False
        token, info = start_token, first

        while True:
            state = self._collect_item(token, info)
            children = self._parse_nested_content(  # type: ignore[attr-defined]
                "\n".join(state.lines), token.location
            )
            items.append(ListItem(location=token.location, children=children))
            if state.inner_gap and len(children) > 1:
                loose = True

            sibling = self._next_sibling(first)
            if sibling is None:
                break
            if state.trailing_blanks:
                loose = True
            token, info = sibling

        self._resync_tokens()  # type: ignore[attr-defined]
        return List(
            location=start_token.location,
            items=tuple(items),
            ordered=first.ordered,
            start=first.start,
            tight=not loose,
        )

    def _next_sibling(self, first: ListMarkerInfo) -> tuple[Token, ListMarkerInfo] | None:
        """The current token and its marker if the line continues this list.

        The line is classified afresh because the stream may have been
        lexed in code mode after a fence inside the previous item.
        """
        if self._at_end():  # type: ignore[attr-defined]
            return None
        token = self._current  # type: ignore[attr-defined]
        line_token = self._classify_line(self._raw_line(token))  # type: ignore[attr-defined]
        if line_token.type != TokenType.LIST_ITEM_MARKER:
            return None
        info = ListMarkerInfo.from_token(line_token)
        if not first.same_list(info):
            return None
        return token, info

    def _collect_item(self, marker_token: Token, info: ListMarkerInfo) -> ListItemState:
        """Consume the lines of one item, starting at its marker line."""
        col = info.content_col
        state = ListItemState()
        state.lines.append(self._raw_line(marker_token).expandtabs(4)[col:])  # type: ignore[attr-defined]
        self._advance()  # type: ignore[attr-defined]

        blanks = 0
        while not self._at_end():  # type: ignore[attr-defined]
            raw = self._raw_line(self._current).expandtabs(4)  # type: ignore[attr-defined]

            if not raw.strip():
                # An item may start with at most one blank line
                if not any(line.strip() for line in state.lines):
                    break
                blanks += 1
                self._advance()  # type: ignore[attr-defined]
                continue

            indent = len(raw) - len(raw.lstrip(" "))
            if indent >= col:
                if blanks:
                    state.lines.extend([""] * blanks)
                    if indent == col:
                        state.inner_gap = True
                    blanks = 0
                state.lines.append(raw[col:])
            elif (
                not blanks
                and self._classify_line(raw).type == TokenType.PARAGRAPH_LINE  # type: ignore[attr-defined]
                and self._ends_in_paragraph(state.lines)  # type: ignore[attr-defined]
            ):
                # Lazy continuation of the item's paragraph
                state.lines.append(raw.lstrip(" "))
            else:
                break
            self._advance()  # type: ignore[attr-defined]

        state.trailing_blanks = blanks
        return state
