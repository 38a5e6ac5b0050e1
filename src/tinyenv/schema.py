"""Options schema and default compilation using Pydantic.

This module validates the options bundle handed to a schema, compiles the
declared defaults into tagged specs once, and defines the library's own
settings read from ``TINYENV_*`` environment variables.
"""

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidOptionsError
from .types import (
    ArrayDefault,
    ArrayType,
    DefaultSpec,
    NoDefault,
    ScalarDefault,
    StructuredDefault,
    UnsetDefault,
)

Validator = Callable[[str, Any], Any]


class EnvOptions(BaseModel):
    """Validated options for resolving a set of keys.

    Defaults are kept exactly as given: their runtime type, not a declared
    annotation, decides how each key is converted.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    defaults: dict[str, Any] = Field(
        default_factory=dict,
        description="Fallback values; each one also fixes its key's type",
    )

    validator: Validator | None = Field(
        default=None,
        description="Called as validator(key, value) after conversion",
    )

    delimiter: str = Field(
        default=",",
        description="Separator used to split array values",
        min_length=1,
    )

    array_types: dict[str, ArrayType] = Field(
        default_factory=dict,
        description="Element types for array defaults, needed when they are empty",
    )


class TinyEnvSettings(BaseSettings):
    """Settings for tinyenv itself, read from TINYENV_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="TINYENV_",
        case_sensitive=False,
        extra="ignore",
    )

    env_file: Path | None = Field(
        default=None,
        description=".env file read by tinyenv() when none is passed explicitly",
    )


def build_options(options: EnvOptions | Mapping[str, Any] | None = None) -> EnvOptions:
    """Coerce a mapping (or nothing) into validated EnvOptions.

    Raises:
        InvalidOptionsError: If any option has the wrong type or value.
    """
    if isinstance(options, EnvOptions):
        return options
    try:
        return EnvOptions(**dict(options or {}))
    except ValidationError as e:
        raise InvalidOptionsError(f"Invalid options: {e}") from e


def validate_keys(keys: Sequence[str]) -> tuple[str, ...]:
    """Return keys as a tuple, rejecting a bare string or non-string items."""
    if isinstance(keys, str | bytes):
        raise InvalidOptionsError(
            f"keys must be a sequence of names, not a single string: {keys!r}"
        )
    result = tuple(keys)
    for key in result:
        if not isinstance(key, str):
            raise InvalidOptionsError(f"Invalid key {key!r}: keys must be strings")
    return result


def infer_element_type(sample: Any) -> ArrayType:
    """Element type implied by the first element of a default array."""
    if isinstance(sample, bool):
        return "boolean"
    if isinstance(sample, int | float):
        return "number"
    return "string"


def compile_default(
    key: str, defaults: Mapping[str, Any], array_types: Mapping[str, ArrayType]
) -> DefaultSpec:
    """Compile the declared default for one key into its tagged spec."""
    if key not in defaults:
        return NoDefault()

    value = defaults[key]
    if value is None:
        return UnsetDefault()
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return ScalarDefault(kind="boolean", value=value)
    if isinstance(value, int | float):
        return ScalarDefault(kind="number", value=value)
    if isinstance(value, str):
        return ScalarDefault(kind="string", value=value)
    if isinstance(value, list | tuple):
        hint = array_types.get(key)
        if hint is None and value:
            hint = infer_element_type(value[0])
        return ArrayDefault(element_type=hint, value=tuple(value))
    if isinstance(value, Mapping):
        return StructuredDefault(shape=value)
    return ScalarDefault(kind="string", value=value)


def compile_defaults(
    keys: Sequence[str], options: EnvOptions
) -> dict[str, DefaultSpec]:
    """Compile defaults for every declared key."""
    return {
        key: compile_default(key, options.defaults, options.array_types)
        for key in keys
    }
