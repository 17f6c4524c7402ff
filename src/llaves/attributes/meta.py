"""Lenient attribute parser for fenced code info strings.

    ```python {#example .numbered title="demo.py"}

The text after the language word is parsed with a forgiving grammar that
never fails: anything it cannot read is skipped. Keys that are not valid
HTML attribute names are read past and dropped.
"""

from llaves.attributes.scope import is_valid_name

_META_SPACE = frozenset(" \t\n\r\f\v")
_ID_STOPS = _META_SPACE | {"}"}
_CLASS_STOPS = _META_SPACE | {".", "#", "}"}
_KEY_STOPS = _META_SPACE | {"=", "}"}


def _read_until(text: str, pos: int, stops: frozenset[str]) -> tuple[str, int]:
    end = pos
    length = len(text)
    while end < length and text[end] not in stops:
        end += 1
    return text[pos:end], end


def parse_meta(meta: str | None) -> dict[str, str]:
    """Parse a code block meta string into an attribute map.

    Supports ``#id``, ``.class``, ``key=value``, ``key="value"``,
    ``key='value'`` and bare ``key`` entries, with or without a surrounding
    ``{}``. A later ``#id`` overwrites an earlier one; classes accumulate.

    Example:
        >>> parse_meta('{#demo .a .b title="x y" linenos}')
        {'id': 'demo', 'class': 'a b', 'title': 'x y', 'linenos': ''}

    """
    result: dict[str, str] = {}
    if not meta:
        return result

    text = meta.strip()
    if text.startswith("{") and text.endswith("}"):
        text = text[1:-1].strip()

    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and text[pos] in _META_SPACE:
            pos += 1
        if pos >= length:
            break

        char = text[pos]
        if char == "#":
            value, pos = _read_until(text, pos + 1, _ID_STOPS)
            if value:
                result["id"] = value
            continue

        if char == ".":
            value, pos = _read_until(text, pos + 1, _CLASS_STOPS)
            if value:
                previous = result.get("class")
                result["class"] = f"{previous} {value}" if previous else value
            continue

        key, pos = _read_until(text, pos, _KEY_STOPS)
        if not key:
            pos += 1
            continue

        value = ""
        if pos < length and text[pos] == "=":
            pos += 1
            if pos < length and text[pos] in "\"'":
                quote = text[pos]
                close = text.find(quote, pos + 1)
                if close == -1:
                    value = text[pos + 1 :]
                    pos = length
                else:
                    value = text[pos + 1 : close]
                    pos = close + 1
            else:
                value, pos = _read_until(text, pos, _ID_STOPS)
        if is_valid_name(key):
            result[key] = value

    return result
