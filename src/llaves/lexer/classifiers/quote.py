"""Block quote classifier mixin."""

from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.tokens import Token, TokenType


class QuoteClassifierMixin(ClassifierMixin):
    """Mixin providing block quote classification."""

    def _classify_block_quote(self, content: str, line_start: int, indent: int = 0) -> Token:
        """Classify a line starting with ``>``.

        Token value: the text after the marker, with one optional space or
        tab removed. The parser collects the following lines itself.
        """
        rest = content[1:]
        if rest[:1] in (" ", "\t"):
            rest = rest[1:]
        return self._make_token(TokenType.BLOCK_QUOTE_MARKER, rest, line_start, line_indent=indent)
