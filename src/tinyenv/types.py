"""Core data types for environment resolution.

This module defines the compiled form of declared defaults (a tagged union
built once per schema) and the immutable record returned to callers,
following the resolve-once, freeze-then-flow pattern.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import dataclasses
from types import MappingProxyType
import typing
from typing import Any, Literal

ArrayType = Literal["string", "number", "boolean"]
ScalarKind = Literal["string", "number", "boolean"]
ValueOrigin = Literal["env", "default"]
OriginMap = Mapping[str, ValueOrigin]

# Substrings that mark a key as sensitive in audit output
SECRET_MARKERS: tuple[str, ...] = (
    "KEY",
    "SECRET",
    "TOKEN",
    "PASSWORD",
    "PASSPHRASE",
    "CREDENTIAL",
)


def is_secret_key(key: str) -> bool:
    """Return True when a key name looks like it holds a secret."""
    upper = key.upper()
    return any(marker in upper for marker in SECRET_MARKERS)


# --- Compiled Default Specs ---


@dataclasses.dataclass(frozen=True, slots=True)
class NoDefault:
    """The key was declared without a default; values stay raw strings."""


@dataclasses.dataclass(frozen=True, slots=True)
class UnsetDefault:
    """The key is present in defaults but mapped to None."""


@dataclasses.dataclass(frozen=True, slots=True)
class ScalarDefault:
    """A number, boolean or string default."""

    kind: ScalarKind
    value: Any


@dataclasses.dataclass(frozen=True, slots=True)
class ArrayDefault:
    """A list or tuple default.

    ``element_type`` is None when neither an explicit hint nor a first
    element was available; elements are then kept as strings.
    """

    element_type: ArrayType | None
    value: tuple[Any, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class StructuredDefault:
    """A mapping default whose shape the parsed JSON must satisfy."""

    shape: Mapping[str, Any]


DefaultSpec = (
    NoDefault | UnsetDefault | ScalarDefault | ArrayDefault | StructuredDefault
)


# --- Result Record ---


class EnvRecord(Mapping[str, Any]):
    """Immutable mapping of declared keys to their converted values.

    Values are reachable by item or attribute access. Any attempt to set
    or delete either raises, so a record can be shared freely once
    returned.
    """

    __slots__ = ("_origin", "_values")

    _values: Mapping[str, Any]
    _origin: OriginMap

    def __init__(self, values: Mapping[str, Any], origin: OriginMap) -> None:
        """Freeze copies of the accumulated values and origins."""
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))
        object.__setattr__(self, "_origin", MappingProxyType(dict(origin)))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} has no key {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"cannot assign to {name!r}: EnvRecord is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"cannot delete {name!r}: EnvRecord is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (EnvRecord, (dict(self._values), dict(self._origin)))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @property
    def origin(self) -> OriginMap:
        """Where each value came from: the input map or the declared default."""
        return self._origin

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, mutable copy of the values."""
        return dict(self._values)

    def audit(self) -> str:
        """Render one ``KEY: origin:value`` line per key with secrets redacted."""
        lines = []
        for key, value in self._values.items():
            origin = self._origin.get(key, "env")
            display = "[REDACTED]" if is_secret_key(key) else repr(value)
            lines.append(f"{key}: {origin}:{display}")
        return "\n".join(lines)

    def __str__(self) -> str:
        """String representation with secret-looking values redacted."""
        items = ", ".join(
            f"{key}={'[REDACTED]' if is_secret_key(key) else repr(value)}"
            for key, value in self._values.items()
        )
        return f"EnvRecord({items})"

    def __repr__(self) -> str:
        """Repr with secret-looking values redacted."""
        return self.__str__()


# --- Schema Adapter Results ---


@dataclasses.dataclass(frozen=True, slots=True)
class Issue:
    """A single reported validation problem."""

    message: str


@dataclasses.dataclass(frozen=True, slots=True)
class SchemaSuccess:
    """A successful validation through the schema adapter."""

    value: EnvRecord


@dataclasses.dataclass(frozen=True, slots=True)
class SchemaFailure:
    """A failed validation; carries exactly one issue (the first failure)."""

    issues: tuple[Issue, ...]


SchemaResult = SchemaSuccess | SchemaFailure


@dataclasses.dataclass(frozen=True, slots=True)
class StandardProps:
    """Standard validate-function shape exposed by a schema."""

    version: int
    vendor: str
    validate: typing.Callable[[object], SchemaResult]
