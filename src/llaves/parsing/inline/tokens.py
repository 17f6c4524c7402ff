"""Delimiter runs for inline emphasis processing.

The inline tokenizer produces a flat list of finished Inline nodes mixed
with DelimiterRun records. Emphasis processing consumes the runs in place
and wraps the nodes between matched openers and closers; any run left over
becomes plain text.

Usage:
    run = DelimiterRun(char="*", count=2, can_open=True, can_close=False)
    match item:
        case DelimiterRun(char="~"):
            ...

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from llaves.nodes import Inline

type DelimiterChar = Literal["*", "_", "~"]


@dataclass(slots=True)
class DelimiterRun:
    """A run of ``*``, ``_`` or ``~~`` delimiters.

    Mutable: ``count`` shrinks as emphasis matches consume delimiters.

    Attributes:
        char: The delimiter character.
        count: Delimiters still available for matching.
        can_open: Whether this run can open emphasis.
        can_close: Whether this run can close emphasis.
        original_count: Run length as written (for the rule of 3).

    """

    char: DelimiterChar
    count: int
    can_open: bool
    can_close: bool
    original_count: int = field(default=0)

    def __post_init__(self) -> None:
        if not self.original_count:
            self.original_count = self.count


type InlineItem = Inline | DelimiterRun
