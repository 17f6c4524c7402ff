"""Character sets shared by the lexer, the inline parser and the attribute lexer.

Sets are module-level frozensets, so membership tests are O(1) and nothing
is allocated per call.

Usage:
    from llaves.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:
        ...
"""

import unicodedata

# CommonMark: ASCII punctuation characters
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


def is_unicode_punctuation(char: str) -> bool:
    """Check if character is Unicode punctuation (P* or S* category).

    Includes ASCII punctuation as a subset. The empty string is not
    punctuation.

    """
    if not char:
        return False
    if char in ASCII_PUNCTUATION:
        return True
    cat = unicodedata.category(char)
    return cat.startswith("P") or cat.startswith("S")


WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


def is_unicode_whitespace(char: str) -> bool:
    """Check if character is Unicode whitespace.

    ASCII whitespace plus category Zs. The empty string counts as whitespace
    so that string boundaries behave like spaces in flanking checks.

    """
    if not char:
        return True
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"


# Inline characters that end a plain text run
INLINE_SPECIAL: frozenset[str] = frozenset("*_`[]!\\\n<{~&")


# Block-level markers
FENCE_CHARS: frozenset[str] = frozenset("`~")
UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")
THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")
DIGITS: frozenset[str] = frozenset("0123456789")

# =============================================================================
# Attribute bracket grammar
# =============================================================================

SPACE_OR_TAB: frozenset[str] = frozenset(" \t")
LINE_ENDINGS: frozenset[str] = frozenset("\r\n")
SPACE_OR_LINE_ENDING: frozenset[str] = SPACE_OR_TAB | LINE_ENDINGS

# Punctuation that may still start a name in the between state
ATTRIBUTE_NAME_START_PUNCTUATION: frozenset[str] = frozenset("-_")

# Punctuation allowed inside a name
ATTRIBUTE_NAME_PUNCTUATION: frozenset[str] = frozenset("-.:_")

# Never allowed in a shortcut or an unquoted value
ATTRIBUTE_VALUE_FORBIDDEN: frozenset[str] = frozenset("\"'<=>`")

# Never allowed as the first character of a #id or .class shortcut
ATTRIBUTE_SHORTCUT_FIRST_FORBIDDEN: frozenset[str] = frozenset("{}\"'#.<=>`")

# Never allowed right after "=" (besides spaces and quotes)
ATTRIBUTE_VALUE_START_FORBIDDEN: frozenset[str] = frozenset("<=>`}")

ATTRIBUTE_QUOTES: frozenset[str] = frozenset("\"'")
