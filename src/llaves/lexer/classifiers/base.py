"""Host contract shared by the classifier mixins."""

from llaves.tokens import Token, TokenType


class ClassifierMixin:
    """Base for classifier mixins; the Lexer provides token construction."""

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        line_indent: int = -1,
    ) -> Token:
        """Create token for the current line. Implemented by Lexer."""
        raise NotImplementedError
