"""Schema adapter exposing the standard validate-function shape.

``TinyEnvSchema.standard.validate`` accepts any input object and returns
either ``SchemaSuccess(value)`` or ``SchemaFailure(issues)`` with a single
issue carrying the first failure's message. It is not tied to the process
environment, so it can validate any mapping of raw values.
"""

from collections.abc import Mapping, Sequence
from functools import cached_property
import logging
from typing import Any

from .engine import CoercionEngine
from .exceptions import AsyncValidationError
from .schema import EnvOptions
from .types import (
    EnvRecord,
    Issue,
    SchemaFailure,
    SchemaResult,
    SchemaSuccess,
    StandardProps,
)

log = logging.getLogger(__name__)

VENDOR = "tinyenv"
STANDARD_VERSION = 1


class TinyEnvSchema:
    """A reusable schema for a fixed list of keys and options."""

    def __init__(
        self,
        keys: Sequence[str],
        options: EnvOptions | Mapping[str, Any] | None = None,
    ) -> None:
        """Build the schema, compiling defaults once.

        Raises:
            InvalidOptionsError: If keys or options are malformed.
        """
        self._engine = CoercionEngine(keys, options)

    @property
    def keys(self) -> tuple[str, ...]:
        """Declared keys in resolution order."""
        return self._engine.keys

    @property
    def options(self) -> EnvOptions:
        """The validated options bundle."""
        return self._engine.options

    def parse(self, value: object) -> EnvRecord:
        """Resolve the schema against ``value``, raising on the first failure.

        Raises:
            TypeError: If ``value`` is not a mapping.
            EnvValidationError: For the first key that fails.
            AsyncValidationError: If the validator returns an awaitable.
        """
        if not isinstance(value, Mapping):
            raise TypeError("Input must be an object")
        return self._engine.resolve(value)

    @cached_property
    def standard(self) -> StandardProps:
        """Standard schema properties: version, vendor and validate."""
        return StandardProps(
            version=STANDARD_VERSION,
            vendor=VENDOR,
            validate=self._validate,
        )

    def _validate(self, value: object) -> SchemaResult:
        try:
            return SchemaSuccess(value=self.parse(value))
        except AsyncValidationError:
            raise
        except Exception as e:
            # Custom validators may raise anything; all of it is one issue
            log.debug("Validation failed: %s", type(e).__name__)
            return SchemaFailure(issues=(Issue(message=str(e) or repr(e)),))

    def __repr__(self) -> str:
        return f"TinyEnvSchema(keys={list(self.keys)!r})"
