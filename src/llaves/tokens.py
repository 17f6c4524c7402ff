"""Token and TokenType definitions for the llaves block lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, value, and source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from llaves.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer.

    One token per source line, except for list items whose marker and
    content share a line.
    """

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()

    # Headings
    ATX_HEADING = auto()  # # Heading

    # Code
    FENCED_CODE_START = auto()  # ``` or ~~~
    FENCED_CODE_END = auto()
    FENCED_CODE_CONTENT = auto()
    INDENTED_CODE = auto()  # 4-space indented

    # Containers
    BLOCK_QUOTE_MARKER = auto()  # > content
    LIST_ITEM_MARKER = auto()  # -, *, +, 1., 1)

    # Other blocks
    THEMATIC_BREAK = auto()  # ---, ***, ___
    PARAGRAPH_LINE = auto()
    LINK_REFERENCE_DEF = auto()  # [label]: url "title"

    # Attribute line: {#id .class key=value}
    ATTRIBUTE_BLOCK = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The classified string value (see the classifier for each type)
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _start_offset: Absolute start position of the line in source
        _end_offset: Absolute end position of the line in source (newline excluded)
        line_indent: Indent level of the line (tabs expand to 4); -1 if not computed
        _source_file: Optional source file path

    """

    type: TokenType
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    line_indent: int = -1
    _source_file: str | None = None

    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from llaves.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._lineno,
            end_col_offset=self._col + (self._end_offset - self._start_offset),
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col
