"""Attribute line classifier mixin.

A line holding only an attribute bracket (and trailing blanks) becomes an
ATTRIBUTE_BLOCK token:

    {#intro .lead data-level=1}
"""

from llaves.attributes.lexer import AttributeSite, scan_attributes
from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.tokens import Token, TokenType


class AttributeClassifierMixin(ClassifierMixin):
    """Mixin providing attribute line classification."""

    _attributes_enabled: bool

    def _try_classify_attribute_line(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as a block attribute line.

        Token value: the bracket text without trailing blanks. The parser
        scans it again to build the attribute map.
        """
        if not self._attributes_enabled or not content.startswith("{"):
            return None
        if scan_attributes(content, 0, AttributeSite.BLOCK) is None:
            return None
        return self._make_token(
            TokenType.ATTRIBUTE_BLOCK, content.rstrip(), line_start, line_indent=indent
        )
