"""Block parsing subsystem for the llaves parser.

Provides mixins for parsing block-level Markdown content:
- Headings (ATX and setext)
- Code blocks (fenced and indented)
- Block quotes
- Lists (ordered and unordered)
- Tables (GFM)
- Paragraphs
- Attribute lines

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch and basic blocks
- list: List parsing with nesting
- table: GFM table parsing

"""

from llaves.parsing.blocks.core import BlockParsingCoreMixin
from llaves.parsing.blocks.list import ListParsingMixin
from llaves.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    TableParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

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
        - _parse_inline(text, location) -> tuple[Inline, ...]
        - _parse_nested_content(content, location, ...) -> tuple[Block, ...]

    """

    pass


__all__ = [
    "BlockParsingMixin",
    "BlockParsingCoreMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
