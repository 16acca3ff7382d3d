"""Renders loosely-typed values as the strings sent to GitHub."""

from typing import Any


def to_text(value: Any) -> str:
    """Stringifies a value with lowercase booleans, ``null`` for None, and integral floats without a decimal part."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
