"""Link reference definition classifier mixin.

Only single-line definitions are recognized:

    [label]: https://example.com "Optional title"
"""

import re

from llaves.lexer.classifiers.base import ClassifierMixin
from llaves.tokens import Token, TokenType

_LINK_REF_RE = re.compile(
    r"""
    \[(?P<label>(?:[^\[\]\\]|\\.){1,999})\]:   # label
    [ \t]*
    (?P<url><[^<>\n]*>|[^\s<][^\s]*)            # destination
    (?:[ \t]+(?P<title>
        "(?:[^"\\]|\\.)*"
      | '(?:[^'\\]|\\.)*'
      | \((?:[^()\\]|\\.)*\)
    ))?
    [ \t]*$
    """,
    re.VERBOSE,
)

# Separator for the token value fields; lines never contain it
LINK_REF_SEPARATOR = "\n"


class LinkRefClassifierMixin(ClassifierMixin):
    """Mixin providing link reference definition classification."""

    def _try_classify_link_reference_def(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as a link reference definition.

        Token value: label, destination and title joined by a newline. The
        destination loses its angle brackets and the title its quotes;
        escapes are processed by the parser.
        """
        match = _LINK_REF_RE.match(content)
        if match is None or not match["label"].strip():
            return None

        url = match["url"]
        if url.startswith("<"):
            url = url[1:-1]
        title = match["title"] or ""
        if title:
            title = title[1:-1]

        value = LINK_REF_SEPARATOR.join((match["label"], url, title))
        return self._make_token(TokenType.LINK_REFERENCE_DEF, value, line_start, line_indent=indent)
