"""String-to-value conversion rules shared by scalar and array keys.

Numbers follow the usual numeric-string grammar for environment values:
surrounding whitespace is ignored, an empty string reads as 0, ``0x``,
``0o`` and ``0b`` prefixes are accepted, as are ``Infinity`` and decimal or
exponent forms. ``nan``, ``inf`` and digit separators are rejected.
"""

import re
from typing import Any

from .exceptions import ArrayElementParseError
from .types import ArrayType

TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_PREFIXED_DIGITS = re.compile(r"[0-9a-fA-F]+", re.ASCII)
_PREFIXED = {"0x": 16, "0o": 8, "0b": 2}
_INFINITY = {
    "Infinity": float("inf"),
    "+Infinity": float("inf"),
    "-Infinity": float("-inf"),
}


def to_text(value: Any) -> str:
    """String form of a raw or default value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_number(text: str) -> int | float:
    """Parse a numeric string.

    Returns an int for integral literals and a float otherwise.

    Raises:
        ValueError: If the text is not a number.
    """
    stripped = text.strip()
    if not stripped:
        return 0
    if stripped in _INFINITY:
        return _INFINITY[stripped]
    if "_" in stripped:
        raise ValueError(f"not a number: {text!r}")

    base = _PREFIXED.get(stripped[:2].lower())
    if base is not None:
        digits = stripped[2:]
        if not _PREFIXED_DIGITS.fullmatch(digits):
            raise ValueError(f"not a number: {text!r}")
        return int(digits, base)
    if _INTEGER.fullmatch(stripped):
        try:
            return int(stripped)
        except ValueError:
            # past the int digit limit
            return float(stripped)
    if _DECIMAL.fullmatch(stripped):
        return float(stripped)
    raise ValueError(f"not a number: {text!r}")


def parse_boolean(text: str) -> bool:
    """Parse true/1/yes or false/0/no, ignoring case.

    Raises:
        ValueError: If the text is none of the accepted spellings.
    """
    lowered = text.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def split_array(text: str, delimiter: str) -> list[str]:
    """Split on the delimiter, trim each element and drop empty ones."""
    return [part.strip() for part in text.split(delimiter) if part.strip()]


def convert_element(element: str, element_type: ArrayType | None, key: str) -> Any:
    """Convert one array element with its scalar rule.

    Raises:
        ArrayElementParseError: Naming the key and the offending element.
    """
    try:
        if element_type == "number":
            return parse_number(element)
        if element_type == "boolean":
            return parse_boolean(element)
    except ValueError as e:
        raise ArrayElementParseError(key, element, element_type) from e
    return element


def convert_elements(
    elements: list[str], element_type: ArrayType | None, key: str
) -> list[Any]:
    """Convert every element; the first failing element is reported."""
    if element_type is None or element_type == "string":
        return list(elements)
    return [convert_element(element, element_type, key) for element in elements]
