"""Fold attribute entries into a map, and write a map back as a bracket.

``compile_attributes`` and ``serialize_attributes`` are near inverses:
serializing a compiled map and scanning the result yields the same map.
"""

from collections.abc import Iterable, Mapping


def compile_attributes(entries: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Fold ordered (key, value) entries into one attribute map.

    Repeated ``class`` entries are joined with a space in encounter order.
    Any other repeated key keeps its last value.

    Example:
        >>> compile_attributes([("class", "a"), ("id", "x"), ("class", "b")])
        {'class': 'a b', 'id': 'x'}

    """
    compiled: dict[str, str] = {}
    for key, value in entries:
        if key == "class" and compiled.get("class"):
            compiled["class"] = f"{compiled['class']} {value}"
        else:
            compiled[key] = value
    return compiled


def serialize_attributes(attributes: Mapping[str, str]) -> str:
    """Render an attribute map as bracket text.

    Used for the literal fallback when a bracket has nothing to attach to.
    Values holding a double quote are single-quoted.

    Example:
        >>> serialize_attributes({"id": "a", "class": "b c", "lang": "en", "hidden": ""})
        '{#a .b .c lang="en" hidden}'

    """
    parts: list[str] = []
    for key, value in attributes.items():
        if key == "id":
            parts.append(f"#{value}")
        elif key == "class":
            parts.extend(f".{token}" for token in value.split())
        elif '"' in value and "'" not in value:
            parts.append(f"{key}='{value}'")
        elif value:
            parts.append(f'{key}="{value}"')
        else:
            parts.append(key)
    return "{" + " ".join(parts) + "}"
