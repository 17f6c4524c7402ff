"""Link and image parsing for the llaves parser.

Handles inline links, reference links, images and autolinks.

- Inline links: ``[text](url "title")``
- Reference links: ``[text][label]``, ``[label][]`` and ``[label]``. They
  produce a LinkReference node that keeps the label, so attribute filters
  can treat them apart from inline links.
- Autolinks: ``<https://example.com>`` and ``<user@example.com>``
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Literal

from llaves.attributes.compiler import serialize_attributes
from llaves.nodes import AttributeInline, CodeSpan, Image, Inline, Link, LinkReference, Text
from llaves.parsing.charsets import ASCII_PUNCTUATION

if TYPE_CHECKING:
    from llaves.location import SourceLocation

_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")
_WHITESPACE_PATTERN = re.compile(r"[ \t\n]+")

type ReferenceType = Literal["full", "collapsed", "shortcut"]

_URI_AUTOLINK = re.compile(r"<([A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*)>")
_EMAIL_AUTOLINK = re.compile(
    r"<([a-zA-Z0-9.!#$%&'*+/=?^_`{|}~\-]+@[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*)>"
)


def _process_escapes(text: str) -> str:
    """Replace backslash-escaped ASCII punctuation with the literal character."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


def _normalize_label(label: str) -> str:
    """Normalize a link label for matching.

    Labels match case-insensitively (Unicode case fold) with runs of
    whitespace collapsed to one space.
    """
    return _WHITESPACE_PATTERN.sub(" ", label.strip()).casefold()


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t\n":
        pos += 1
    return pos


def _parse_link_destination(text: str, pos: int) -> tuple[str, int] | None:
    """Parse a link destination starting at pos.

    Either ``<...>`` (spaces allowed, no newlines or unescaped ``<``) or a
    run of non-space characters with balanced parentheses.

    Returns:
        (url, end_pos) or None if invalid
    """
    text_len = len(text)
    if pos < text_len and text[pos] == "<":
        end = pos + 1
        while end < text_len:
            char = text[end]
            if char == ">":
                return _process_escapes(text[pos + 1 : end]), end + 1
            if char in "\n<":
                return None
            end += 2 if char == "\\" else 1
        return None

    start = pos
    depth = 0
    while pos < text_len:
        char = text[pos]
        if char in " \t\n" or ord(char) < 0x20:
            break
        if char == "\\" and pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
            pos += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            if not depth:
                break
            depth -= 1
        pos += 1

    if depth:
        return None
    return _process_escapes(text[start:pos]), pos


def _parse_link_title(text: str, pos: int) -> tuple[str, int] | None:
    """Parse a ``"..."``, ``'...'`` or ``(...)`` title starting at pos."""
    if pos >= len(text) or text[pos] not in "\"'(":
        return None
    closer = ")" if text[pos] == "(" else text[pos]
    end = pos + 1
    while end < len(text):
        char = text[end]
        if char == closer:
            return _process_escapes(text[pos + 1 : end]), end + 1
        end += 2 if char == "\\" else 1
    return None


def _parse_inline_link(text: str, pos: int) -> tuple[str, str | None, int] | None:
    """Parse ``(url "title")`` starting at the opening parenthesis.

    Returns:
        (url, title, end_pos) or None if invalid
    """
    if pos >= len(text) or text[pos] != "(":
        return None

    pos = _skip_ws(text, pos + 1)
    if pos < len(text) and text[pos] == ")":
        return "", None, pos + 1

    destination = _parse_link_destination(text, pos)
    if destination is None:
        return None
    url, pos = destination

    title: str | None = None
    after_url = _skip_ws(text, pos)
    if after_url > pos:
        parsed_title = _parse_link_title(text, after_url)
        if parsed_title is not None:
            title, pos = parsed_title
    pos = _skip_ws(text, pos)

    if pos >= len(text) or text[pos] != ")":
        return None
    return url, title, pos + 1


def _find_closing_bracket(text: str, start: int) -> int:
    """Find the ``]`` closing the bracket opened just before ``start``.

    Nested brackets are balanced, escapes are skipped, and code spans hide
    their contents.

    Returns:
        Position of the closing ``]`` or -1
    """
    pos = start
    depth = 0
    text_len = len(text)
    while pos < text_len:
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == "`":
            end = pos
            while end < text_len and text[end] == "`":
                end += 1
            close = text.find(text[pos:end], end)
            pos = close + (end - pos) if close != -1 else end
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            if not depth:
                return pos
            depth -= 1
        pos += 1
    return -1


def _extract_plain_text(nodes: tuple[Inline, ...]) -> str:
    """Flatten inline nodes to plain text (image alt text)."""
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(content=content):
                parts.append(content)
            case Image(alt=alt):
                parts.append(alt)
            case CodeSpan(code=code):
                parts.append(code)
            case AttributeInline(attributes=attributes):
                parts.append(serialize_attributes(attributes))
            case _:
                children = getattr(node, "children", None)
                if children:
                    parts.append(_extract_plain_text(children))
    return "".join(parts)


def _contains_link(children: tuple[Inline, ...]) -> bool:
    """Check if children contain a link at any nesting level.

    Links may not contain other links.
    """
    for child in children:
        if isinstance(child, (Link, LinkReference)):
            return True
        nested = getattr(child, "children", None)
        if nested and _contains_link(nested):
            return True
    return False


class LinkParsingMixin:
    """Mixin for link and image parsing.

    Required Host Attributes:
        - _link_refs: dict[str, tuple[str, str]]

    Required Host Methods:
        - _parse_inline(text, location) -> tuple[Inline, ...]

    """

    _link_refs: dict[str, tuple[str, str]]

    def _parse_inline(self, text: str, location: SourceLocation) -> tuple[Inline, ...]:
        """Parse inline content. Implemented by InlineParsingCoreMixin."""
        raise NotImplementedError

    def _lookup_reference(
        self, text: str, bracket_pos: int, inner: str
    ) -> tuple[str, ReferenceType, tuple[str, str], int] | None:
        """Resolve a reference after ``[inner]`` ending at ``bracket_pos``.

        Returns:
            (label, reference_type, (url, title), end_pos) or None
        """
        after = bracket_pos + 1
        if after < len(text) and text[after] == "[":
            label_end = text.find("]", after + 1)
            if label_end == -1:
                return None
            label = text[after + 1 : label_end]
            reference_type: ReferenceType = "full" if label.strip() else "collapsed"
            if reference_type == "collapsed":
                label = inner
            target = self._link_refs.get(_normalize_label(label))
            if target is None:
                return None
            return label, reference_type, target, label_end + 1

        target = self._link_refs.get(_normalize_label(inner))
        if target is None:
            return None
        return inner, "shortcut", target, after

    def _try_parse_link(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[Link | LinkReference, int] | None:
        """Try to parse a link at position.

        Returns (Link or LinkReference, new_position) or None if not a link.
        """
        bracket_pos = _find_closing_bracket(text, pos + 1)
        if bracket_pos == -1:
            return None
        inner = text[pos + 1 : bracket_pos]

        if bracket_pos + 1 < len(text) and text[bracket_pos + 1] == "(":
            parsed = _parse_inline_link(text, bracket_pos + 1)
            if parsed is not None:
                url, title, end_pos = parsed
                children = self._parse_inline(inner, location)
                if _contains_link(children):
                    return None
                return Link(location=location, url=url, title=title, children=children), end_pos

        if not inner.strip():
            return None
        reference = self._lookup_reference(text, bracket_pos, inner)
        if reference is None:
            return None

        label, reference_type, (url, title), end_pos = reference
        children = self._parse_inline(inner, location)
        if _contains_link(children):
            return None
        node = LinkReference(
            location=location,
            url=url,
            title=title or None,
            label=label,
            reference_type=reference_type,
            children=children,
        )
        return node, end_pos

    def _try_parse_image(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[Image, int] | None:
        """Try to parse an image at position (``text[pos]`` is ``!``).

        Reference images resolve to a plain Image.
        """
        if pos + 1 >= len(text) or text[pos + 1] != "[":
            return None
        bracket_pos = _find_closing_bracket(text, pos + 2)
        if bracket_pos == -1:
            return None
        inner = text[pos + 2 : bracket_pos]
        alt = _extract_plain_text(self._parse_inline(inner, location))

        if bracket_pos + 1 < len(text) and text[bracket_pos + 1] == "(":
            parsed = _parse_inline_link(text, bracket_pos + 1)
            if parsed is not None:
                url, title, end_pos = parsed
                return Image(location=location, url=url, alt=alt, title=title), end_pos

        if not inner.strip():
            return None
        reference = self._lookup_reference(text, bracket_pos, inner)
        if reference is None:
            return None
        _, _, (url, title), end_pos = reference
        return Image(location=location, url=url, alt=alt, title=title or None), end_pos

    def _try_parse_autolink(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[Link, int] | None:
        """Try to parse ``<scheme:...>`` or ``<email>`` at position."""
        match = _URI_AUTOLINK.match(text, pos)
        if match is not None:
            target = match.group(1)
            return Link(
                location=location,
                url=target,
                title=None,
                children=(Text(location=location, content=target),),
            ), match.end()

        match = _EMAIL_AUTOLINK.match(text, pos)
        if match is not None:
            address = match.group(1)
            return Link(
                location=location,
                url=f"mailto:{address}",
                title=None,
                children=(Text(location=location, content=address),),
            ), match.end()
        return None
