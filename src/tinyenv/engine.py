"""Coercion engine: resolves declared keys against an input mapping.

Keys are processed strictly in declaration order and the first failing key
decides the error raised. Values are accumulated privately and only frozen
into an EnvRecord once every key has succeeded, so no partial result is
ever observable.
"""

from collections.abc import Mapping, Sequence
import inspect
import json
import logging
from typing import Any

from .coercion import (
    convert_elements,
    parse_boolean,
    parse_number,
    split_array,
    to_text,
)
from .exceptions import (
    AsyncValidationError,
    BooleanParseError,
    CustomValidationError,
    InvalidDefaultError,
    JsonParseError,
    MissingVariableError,
    NumberParseError,
)
from .schema import EnvOptions, build_options, compile_defaults, validate_keys
from .shape import validate_shape
from .types import (
    ArrayDefault,
    DefaultSpec,
    EnvRecord,
    NoDefault,
    ScalarDefault,
    StructuredDefault,
    UnsetDefault,
    ValueOrigin,
)

log = logging.getLogger(__name__)


class CoercionEngine:
    """Converts raw string inputs into typed values for a fixed key list.

    Defaults are compiled once at construction; each call to ``resolve`` is
    independent and shares no mutable state with other calls.
    """

    def __init__(
        self,
        keys: Sequence[str],
        options: EnvOptions | Mapping[str, Any] | None = None,
    ) -> None:
        """Validate the keys and options and compile the defaults.

        Raises:
            InvalidOptionsError: If keys or options are malformed.
        """
        self.keys = validate_keys(keys)
        self.options = build_options(options)
        self.specs: dict[str, DefaultSpec] = compile_defaults(self.keys, self.options)

    def resolve(self, source: Mapping[str, Any]) -> EnvRecord:
        """Resolve every declared key from ``source``.

        Args:
            source: Raw values by key. Missing keys, None and blank strings
                all count as absent.

        Returns:
            The frozen record of converted values.

        Raises:
            EnvValidationError: For the first key that fails.
            AsyncValidationError: If the validator returns an awaitable.
        """
        values: dict[str, Any] = {}
        origin: dict[str, ValueOrigin] = {}

        for key in self.keys:
            spec = self.specs[key]
            if isinstance(spec, UnsetDefault):
                raise InvalidDefaultError(key)

            raw = source.get(key)
            text = None if raw is None else to_text(raw)
            if text is None or not text.strip():
                if isinstance(spec, NoDefault):
                    raise MissingVariableError(key)
                value = _default_value(spec)
                origin[key] = "default"
            else:
                value = self._convert(key, text, spec)
                origin[key] = "env"

            self._run_validator(key, value)
            values[key] = value
            log.debug("Resolved %s from %s", key, origin[key])

        return EnvRecord(values, origin)

    def _convert(self, key: str, text: str, spec: DefaultSpec) -> Any:
        if isinstance(spec, ScalarDefault):
            if spec.kind == "number":
                try:
                    return parse_number(text)
                except ValueError as e:
                    raise NumberParseError(key, text) from e
            if spec.kind == "boolean":
                try:
                    return parse_boolean(text)
                except ValueError as e:
                    raise BooleanParseError(key, text) from e
            return text

        if isinstance(spec, ArrayDefault):
            elements = split_array(text, self.options.delimiter)
            return convert_elements(elements, spec.element_type, key)

        if isinstance(spec, StructuredDefault):
            try:
                parsed = json.loads(text, parse_constant=_reject_constant)
            except ValueError as e:
                raise JsonParseError(key, text, str(e)) from e
            validate_shape(parsed, spec.shape, key)
            return parsed

        return text

    def _run_validator(self, key: str, value: Any) -> None:
        validator = self.options.validator
        if validator is None:
            return

        try:
            outcome = validator(key, value)
        except Exception as e:
            if str(e):
                raise
            raise CustomValidationError(
                key, f"Validation failed for {key}: {e!r}", value
            ) from e

        if inspect.isawaitable(outcome):
            if inspect.iscoroutine(outcome):
                outcome.close()
            raise AsyncValidationError(
                "Async validation is not supported "
                f"(validator returned an awaitable for {key})"
            )


def resolve(
    keys: Sequence[str],
    source: Mapping[str, Any],
    options: EnvOptions | Mapping[str, Any] | None = None,
) -> EnvRecord:
    """Resolve ``keys`` against ``source`` in one call.

    Example:
        record = resolve(["PORT"], {"PORT": "8080"}, {"defaults": {"PORT": 3000}})
        assert record.PORT == 8080
    """
    return CoercionEngine(keys, options).resolve(source)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _default_value(spec: DefaultSpec) -> Any:
    """The typed value to use when a key falls back to its default."""
    if isinstance(spec, ArrayDefault):
        return _thaw(spec.value)
    if isinstance(spec, StructuredDefault):
        return _thaw(spec.shape)
    if isinstance(spec, ScalarDefault) and spec.kind == "string":
        return str(spec.value)
    if isinstance(spec, ScalarDefault):
        return spec.value
    raise AssertionError(f"no default value for {spec!r}")


def _thaw(value: Any) -> Any:
    """Deep copy of a default into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_thaw(v) for v in value]
    return value
