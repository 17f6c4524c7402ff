"""Character-level lexer for attribute brackets.

Recognizes one ``{...}`` bracket and splits it into ordered entries:

    {#intro .lead .wide data-x=1 hidden title="A &amp; B"}

    -> ("id", "intro"), ("class", "lead"), ("class", "wide"),
       ("data-x", "1"), ("hidden", ""), ("title", "A & B")

The grammar is strict. Any unexpected character fails the whole bracket
and the caller keeps the text literal, so the lexer never raises and never
consumes input on failure.

The machine is a ScanState enum plus one step function over a mutable
cursor. Each step either consumes a character or moves to a state that
will, so a scan always terminates.

Thread Safety:
No module state. Each call builds its own cursor.

"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from enum import Enum, auto

from llaves.attributes.compiler import compile_attributes
from llaves.parsing.charsets import (
    ATTRIBUTE_NAME_PUNCTUATION,
    ATTRIBUTE_NAME_START_PUNCTUATION,
    ATTRIBUTE_QUOTES,
    ATTRIBUTE_SHORTCUT_FIRST_FORBIDDEN,
    ATTRIBUTE_VALUE_FORBIDDEN,
    ATTRIBUTE_VALUE_START_FORBIDDEN,
    LINE_ENDINGS,
    SPACE_OR_LINE_ENDING,
    SPACE_OR_TAB,
    is_unicode_punctuation,
    is_unicode_whitespace,
)


class AttributeSite(Enum):
    """Where a bracket is being scanned.

    INLINE brackets end at ``}``. BLOCK brackets must also be the only
    thing left on their line apart from spaces and tabs.
    """

    INLINE = auto()
    BLOCK = auto()


class ScanState(Enum):
    """States of the bracket state machine."""

    BETWEEN = auto()
    SHORTCUT_START = auto()
    SHORTCUT = auto()
    NAME = auto()
    NAME_AFTER = auto()
    VALUE_BEFORE = auto()
    VALUE_UNQUOTED = auto()
    VALUE_QUOTED = auto()
    VALUE_QUOTED_AFTER = auto()
    END = auto()
    DONE = auto()
    FAILED = auto()


_FINAL_STATES = frozenset({ScanState.DONE, ScanState.FAILED})


@dataclass(frozen=True, slots=True)
class AttributeScan:
    """Result of a successful bracket scan.

    Attributes:
        attributes: Compiled attribute map
        entries: Raw (key, value) entries in source order
        start: Offset of the opening ``{``
        end: Offset just past the bracket (past trailing blanks for BLOCK)

    """

    attributes: dict[str, str] = field(hash=False)
    entries: tuple[tuple[str, str], ...]
    start: int
    end: int


@dataclass(slots=True)
class _Cursor:
    text: str
    pos: int
    state: ScanState = ScanState.BETWEEN
    kind: str = ""  # "id" or "class" inside a shortcut
    marker: str = ""  # opening quote inside a quoted value
    start: int = 0  # start of the pending name or value
    entries: list[tuple[str, str]] = field(default_factory=list)

    def peek(self) -> str:
        """Current character, or "" at end of input."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def pending(self) -> str:
        return self.text[self.start : self.pos]

    def set_value(self, value: str) -> None:
        key, _ = self.entries[-1]
        self.entries[-1] = (key, html.unescape(value))


def _step(cur: _Cursor) -> None:
    char = cur.peek()

    match cur.state:
        case ScanState.BETWEEN:
            if char == "#" or char == ".":
                cur.kind = "id" if char == "#" else "class"
                cur.pos += 1
                cur.state = ScanState.SHORTCUT_START
            elif char and char in SPACE_OR_TAB:
                cur.pos += 1
            elif (
                not char
                or char in LINE_ENDINGS
                or is_unicode_whitespace(char)
                or (is_unicode_punctuation(char) and char not in ATTRIBUTE_NAME_START_PUNCTUATION)
            ):
                cur.state = ScanState.END
            else:
                cur.start = cur.pos
                cur.pos += 1
                cur.state = ScanState.NAME

        case ScanState.SHORTCUT_START:
            if (
                not char
                or char in ATTRIBUTE_SHORTCUT_FIRST_FORBIDDEN
                or char in SPACE_OR_LINE_ENDING
            ):
                cur.state = ScanState.FAILED
            else:
                cur.start = cur.pos
                cur.pos += 1
                cur.state = ScanState.SHORTCUT

        case ScanState.SHORTCUT:
            if not char or char in ATTRIBUTE_VALUE_FORBIDDEN:
                cur.state = ScanState.FAILED
            elif char in "#.}" or char in SPACE_OR_LINE_ENDING:
                cur.entries.append((cur.kind, html.unescape(cur.pending())))
                cur.state = ScanState.BETWEEN
            else:
                cur.pos += 1

        case ScanState.NAME:
            if (
                not char
                or char in LINE_ENDINGS
                or is_unicode_whitespace(char)
                or (is_unicode_punctuation(char) and char not in ATTRIBUTE_NAME_PUNCTUATION)
            ):
                cur.entries.append((cur.pending(), ""))
                cur.state = ScanState.NAME_AFTER
            else:
                cur.pos += 1

        case ScanState.NAME_AFTER:
            if char and char in SPACE_OR_TAB:
                cur.pos += 1
            elif char == "=":
                cur.pos += 1
                cur.state = ScanState.VALUE_BEFORE
            else:
                cur.state = ScanState.BETWEEN

        case ScanState.VALUE_BEFORE:
            if not char or char in ATTRIBUTE_VALUE_START_FORBIDDEN or char in LINE_ENDINGS:
                cur.state = ScanState.FAILED
            elif char in ATTRIBUTE_QUOTES:
                cur.marker = char
                cur.pos += 1
                cur.start = cur.pos
                cur.state = ScanState.VALUE_QUOTED
            elif char in SPACE_OR_TAB:
                cur.pos += 1
            else:
                cur.start = cur.pos
                cur.pos += 1
                cur.state = ScanState.VALUE_UNQUOTED

        case ScanState.VALUE_UNQUOTED:
            if not char or char in ATTRIBUTE_VALUE_FORBIDDEN:
                cur.state = ScanState.FAILED
            elif char == "}" or char in SPACE_OR_LINE_ENDING:
                cur.set_value(cur.pending())
                cur.state = ScanState.BETWEEN
            else:
                cur.pos += 1

        case ScanState.VALUE_QUOTED:
            if char == cur.marker:
                cur.set_value(cur.pending())
                cur.pos += 1
                cur.state = ScanState.VALUE_QUOTED_AFTER
            elif not char or char in LINE_ENDINGS:
                cur.state = ScanState.FAILED
            else:
                cur.pos += 1

        case ScanState.VALUE_QUOTED_AFTER:
            if char == "}" or (char and char in SPACE_OR_LINE_ENDING):
                cur.state = ScanState.BETWEEN
            else:
                cur.state = ScanState.END

        case ScanState.END:
            if char == "}":
                cur.pos += 1
                cur.state = ScanState.DONE
            else:
                cur.state = ScanState.FAILED


def _line_rest_is_blank(text: str, pos: int) -> int | None:
    """Return the offset after trailing blanks if only blanks remain on the line."""
    length = len(text)
    while pos < length and text[pos] in SPACE_OR_TAB:
        pos += 1
    if pos < length and text[pos] not in LINE_ENDINGS:
        return None
    return pos


def scan_attributes(
    text: str,
    pos: int = 0,
    site: AttributeSite = AttributeSite.INLINE,
) -> AttributeScan | None:
    """Scan one attribute bracket starting at ``text[pos]``.

    Args:
        text: Source text
        pos: Offset of the opening ``{``
        site: INLINE for brackets inside phrasing content, BLOCK for a
            bracket that must fill the rest of its line

    Returns:
        AttributeScan on success, None when the bracket is malformed.

    Example:
        >>> scan = scan_attributes('{#a .b c="d"}')
        >>> scan.attributes
        {'id': 'a', 'class': 'b', 'c': 'd'}
        >>> scan_attributes("{.class") is None
        True

    """
    if pos >= len(text) or text[pos] != "{":
        return None

    cursor = _Cursor(text=text, pos=pos + 1)
    while cursor.state not in _FINAL_STATES:
        _step(cursor)

    if cursor.state is ScanState.FAILED:
        return None

    end = cursor.pos
    if site is AttributeSite.BLOCK:
        line_end = _line_rest_is_blank(text, end)
        if line_end is None:
            return None
        end = line_end

    entries = tuple(cursor.entries)
    return AttributeScan(
        attributes=compile_attributes(entries),
        entries=entries,
        start=pos,
        end=end,
    )
