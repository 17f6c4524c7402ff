"""Line-based lexer for the llaves Markdown parser.

The lexer looks at one line at a time, classifies it, and emits exactly
one token for it. Container blocks (quotes, list items) are tokenized by
their first line only; the parser re-reads their raw lines and parses the
inner content with a nested parser.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum
├── classifiers/         # Block-type classification mixins
│   ├── heading.py       # ATX heading
│   ├── fence.py         # Fenced code
│   ├── thematic.py      # Thematic break
│   ├── quote.py         # Block quote
│   ├── list.py          # List markers
│   ├── link_ref.py      # Link reference definitions
│   └── attribute.py     # {#id .class} lines
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch)
    └── fence.py         # Code fence mode

Usage:
    >>> from llaves.lexer import Lexer
    >>> for token in Lexer("# Hello\n{.lead}").tokenize():
    ...     print(token)
Token(ATX_HEADING, '# Hello', 1:1)
Token(ATTRIBUTE_BLOCK, '{.lead}', 2:1)
Token(EOF, '', 2:8)

"""

from llaves.lexer.core import Lexer
from llaves.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
