"""Structural validation of parsed JSON against a default's shape.

The default object acts as the minimum required shape: every property it
declares must be present with a matching type tag, while extra properties
in the parsed value are accepted. Lists are compared by tag only.
"""

from collections.abc import Mapping
from typing import Any

from .exceptions import MissingPropertyError, TypeMismatchError


def type_tag(value: Any) -> str:
    """Name the JSON-level type of a value.

    None, mappings and lists all share the ``object`` tag.
    """
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def validate_shape(
    value: Any, default: Any, key: str, path: tuple[str, ...] = ()
) -> None:
    """Check that ``value`` has at least the structure of ``default``.

    Args:
        value: The parsed value (or a nested part of it)
        default: The matching part of the default
        key: The declared key, used as the root of reported paths
        path: Property names leading from the root to this pair

    Raises:
        TypeMismatchError: If the type tags of value and default differ
        MissingPropertyError: If a property of the default is absent
    """
    expected = type_tag(default)
    actual = type_tag(value)
    if expected != actual:
        raise TypeMismatchError(key, _dotted(key, path), expected, actual)

    if not isinstance(default, Mapping):
        return
    # Lists and null carry none of the default's properties
    properties = value if isinstance(value, Mapping) else {}

    for prop, prop_default in default.items():
        # None marks an optional, untyped property
        if prop_default is None:
            continue
        name = str(prop)
        if prop not in properties:
            raise MissingPropertyError(key, _dotted(key, (*path, name)))
        validate_shape(properties[prop], prop_default, key, (*path, name))


def _dotted(key: str, path: tuple[str, ...]) -> str:
    return ".".join((key, *path))
