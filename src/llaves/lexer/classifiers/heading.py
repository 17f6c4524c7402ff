"""ATX heading classifier mixin."""

from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.tokens import Token, TokenType


class HeadingClassifierMixin(ClassifierMixin):
    """Mixin providing ATX heading classification."""

    def _try_classify_atx_heading(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as ATX heading.

        ATX headings start with 1-6 # characters followed by space, tab or
        end of line. A closing # sequence is removed if preceded by space.

        Token value: "#" * level, then a space and the heading text if any.
        """
        level = 0
        while level < len(content) and content[level] == "#":
            level += 1

        if level == 0 or level > 6:
            return None

        if level < len(content) and content[level] not in " \t":
            return None

        text = content[level:].strip()

        if text.endswith("#"):
            trailing_start = len(text.rstrip("#"))
            if trailing_start == 0:
                text = ""
            elif text[trailing_start - 1] in " \t":
                text = text[:trailing_start].rstrip()

        value = "#" * level + (" " + text if text else "")
        return self._make_token(TokenType.ATX_HEADING, value, line_start, line_indent=indent)
