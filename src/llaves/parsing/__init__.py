"""Parsing subsystem for the llaves Markdown parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin` (token_nav): Token stream traversal
- `InlineParsingMixin` (inline): Inline content (emphasis, links, brackets)
- `BlockParsingMixin` (blocks): Block-level content (paragraphs, lists, code)

Architecture:
The parser uses a mixin-based design for separation of concerns. Each
mixin handles one aspect of the Markdown grammar.

Example:
    >>> from llaves.parsing.blocks import BlockParsingMixin
    >>> from llaves.parsing.inline import InlineParsingMixin
    >>> from llaves.parsing.token_nav import TokenNavigationMixin
    >>> class Parser(TokenNavigationMixin, InlineParsingMixin, BlockParsingMixin):
    ...     pass

The mixins are imported from their submodules rather than re-exported
here: the attribute lexer and the line lexer import ``llaves.parsing.charsets``,
and an eager import of the mixins from this package would cycle back
into them.

"""
