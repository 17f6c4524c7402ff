"""Thematic break classifier mixin."""

from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.parsing.charsets import THEMATIC_BREAK_CHARS
from llaves.tokens import Token, TokenType


class ThematicClassifierMixin(ClassifierMixin):
    """Mixin providing thematic break classification."""

    def _try_classify_thematic_break(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as thematic break.

        Three or more of the same character (-, *, _) with optional spaces
        or tabs between them. The value keeps the line so the parser can
        tell a "---" setext underline apart from "- - -".
        """
        if not content or content[0] not in THEMATIC_BREAK_CHARS:
            return None

        char = content[0]
        count = 0
        for c in content:
            if c == char:
                count += 1
            elif c not in " \t":
                return None

        if count < 3:
            return None
        return self._make_token(
            TokenType.THEMATIC_BREAK, content.rstrip(), line_start, line_indent=indent
        )
