"""Attribute bracket support: ``{#id .class key="value"}``.

Pipeline:
- lexer: scan one bracket into ordered (key, value) entries
- compiler: fold entries into an attribute map, or write a map back as text
- meta: lenient reader for the text after a fenced code block's language
- scope: drop attribute names the configured scope does not allow
- resolver: attach placeholders left by the parser to their target nodes

"""

from llaves.attributes.compiler import compile_attributes, serialize_attributes
from llaves.attributes.lexer import AttributeScan, AttributeSite, scan_attributes
from llaves.attributes.meta import parse_meta
from llaves.attributes.resolver import assign_attributes, resolve_attributes
from llaves.attributes.scope import (
    filter_attributes,
    is_dangerous,
    is_global,
    is_valid_name,
    tag_for,
)

__all__ = [
    "AttributeScan",
    "AttributeSite",
    "assign_attributes",
    "compile_attributes",
    "filter_attributes",
    "is_dangerous",
    "is_global",
    "is_valid_name",
    "parse_meta",
    "resolve_attributes",
    "scan_attributes",
    "serialize_attributes",
    "tag_for",
]
