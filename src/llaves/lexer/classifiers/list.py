"""List marker classifier mixin."""

from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.parsing.charsets import DIGITS, UNORDERED_LIST_MARKERS
from llaves.tokens import Token, TokenType


def _marker_length(content: str) -> int:
    """Length of a list marker at the start of content, or 0."""
    if not content:
        return 0
    if content[0] in UNORDERED_LIST_MARKERS:
        return 1

    digits = len(content) - len(content.lstrip("0123456789"))
    if 0 < digits <= 9 and digits < len(content) and content[digits] in ".)":
        return digits + 1
    return 0


class ListClassifierMixin(ClassifierMixin):
    """Mixin providing list marker classification."""

    def _try_classify_list_marker(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as a list item marker.

        Bullets are ``-``, ``*`` and ``+``; ordered markers are 1-9 digits
        followed by ``.`` or ``)``. The marker must be followed by a space,
        a tab or the end of the line.

        Token value: "{content_col}:{marker}", where content_col is the
        column at which the item's content starts (tabs expanded to 4).
        """
        length = _marker_length(content)
        if not length:
            return None

        marker = content[:length]
        if length < len(content) and content[length] not in " \t":
            return None

        # Tab stops are relative to the start of the line
        marker_end = indent + length
        rest = (" " * indent + content).expandtabs(4)[marker_end:]
        padding = len(rest) - len(rest.lstrip(" "))
        if not rest.strip() or padding > 4:
            # Blank first line, or content that is itself indented code
            content_col = marker_end + 1
        else:
            content_col = marker_end + padding

        return self._make_token(
            TokenType.LIST_ITEM_MARKER, f"{content_col}:{marker}", line_start, line_indent=indent
        )


def is_ordered_marker(marker: str) -> bool:
    return marker[0] in DIGITS
