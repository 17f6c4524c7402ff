"""Fenced code block classifier mixin."""

from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.lexer.modes import LexerMode
from llaves.parsing.charsets import FENCE_CHARS
from llaves.tokens import Token, TokenType


class FenceClassifierMixin(ClassifierMixin):
    """Mixin providing fenced code block classification."""

    # Set by the Lexer class
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _mode: LexerMode

    def _try_classify_fence_start(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as fenced code start.

        Fences are 3+ backticks or tildes. Backtick fences cannot have
        backticks in the info string. On success the lexer switches to
        CODE_FENCE mode.

        Token value: "I{indent}:" + fence + info. The parser reads the indent
        back to strip it from content lines.
        """
        if not content or content[0] not in FENCE_CHARS:
            return None

        fence_char = content[0]
        count = len(content) - len(content.lstrip(fence_char))
        if count < 3:
            return None

        info = content[count:].strip()
        if fence_char == "`" and "`" in info:
            return None

        self._fence_char = fence_char
        self._fence_count = count
        self._fence_indent = indent
        self._mode = LexerMode.CODE_FENCE

        value = f"I{indent}:" + fence_char * count + info
        return self._make_token(TokenType.FENCED_CODE_START, value, line_start, line_indent=indent)

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line closes the current code block.

        Closing fences may be indented 0-3 spaces, must use the opening
        character at least as many times, and carry nothing else.
        """
        if not self._fence_char:
            return False

        stripped = line.lstrip(" ")
        if len(line) - len(stripped) >= 4:
            return False

        count = len(stripped) - len(stripped.lstrip(self._fence_char))
        if count < self._fence_count:
            return False
        return not stripped[count:].strip()
