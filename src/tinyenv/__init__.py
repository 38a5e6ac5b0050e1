"""Typed, validated environment variables from a list of keys and defaults."""

import importlib.metadata
import logging

from tinyenv.api import load_environ, tinyenv
from tinyenv.engine import CoercionEngine, resolve
from tinyenv.exceptions import (
    ArrayElementParseError,
    AsyncValidationError,
    BooleanParseError,
    CustomValidationError,
    EnvValidationError,
    InvalidDefaultError,
    InvalidOptionsError,
    JsonParseError,
    MissingPropertyError,
    MissingVariableError,
    NumberParseError,
    TinyEnvError,
    TypeMismatchError,
)
from tinyenv.schema import EnvOptions, TinyEnvSettings
from tinyenv.standard import TinyEnvSchema
from tinyenv.types import (
    ArrayType,
    EnvRecord,
    Issue,
    SchemaFailure,
    SchemaResult,
    SchemaSuccess,
    StandardProps,
)

# Version handling
try:
    __version__ = importlib.metadata.version("tinyenv")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Entry points
    "tinyenv",
    "load_environ",
    "resolve",
    "CoercionEngine",
    "TinyEnvSchema",
    # Options and settings
    "EnvOptions",
    "TinyEnvSettings",
    "ArrayType",
    # Results
    "EnvRecord",
    "Issue",
    "SchemaFailure",
    "SchemaResult",
    "SchemaSuccess",
    "StandardProps",
    # Exceptions
    "TinyEnvError",
    "EnvValidationError",
    "MissingVariableError",
    "InvalidDefaultError",
    "NumberParseError",
    "BooleanParseError",
    "ArrayElementParseError",
    "JsonParseError",
    "MissingPropertyError",
    "TypeMismatchError",
    "CustomValidationError",
    "InvalidOptionsError",
    "AsyncValidationError",
]
