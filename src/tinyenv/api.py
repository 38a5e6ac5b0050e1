"""Public entry point resolving declared keys from the process environment.

The engine never reads the environment itself; this module materializes
the input mapping (optionally overlaid on a .env file) and hands it over.
"""

from collections.abc import Mapping, Sequence
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from .schema import TinyEnvSettings, Validator
from .standard import TinyEnvSchema
from .types import ArrayType, EnvRecord

log = logging.getLogger(__name__)


def load_environ(
    env_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Materialize the input mapping for a resolution.

    Args:
        env_file: Optional .env file. Its values fill in keys the
            environment does not set; the environment always wins. When
            None, ``TINYENV_ENV_FILE`` is consulted.
        environ: Mapping to use instead of ``os.environ``.

    Returns:
        A fresh dictionary; ``os.environ`` is never modified.

    Raises:
        FileNotFoundError: If the .env file doesn't exist.
    """
    source = dict(os.environ if environ is None else environ)

    if env_file is None:
        env_file = TinyEnvSettings().env_file
    if not env_file:
        return source

    env_path = Path(env_file)
    if not env_path.exists():
        raise FileNotFoundError(f"Environment file not found: {env_path}")

    file_values = {
        key: value
        for key, value in dotenv_values(env_path, encoding="utf-8").items()
        if value is not None
    }
    log.debug("Loaded %d values from %s", len(file_values), env_path)
    return {**file_values, **source}


def tinyenv(
    keys: Sequence[str],
    *,
    defaults: Mapping[str, Any] | None = None,
    validator: Validator | None = None,
    delimiter: str = ",",
    array_types: Mapping[str, ArrayType] | None = None,
    env_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> EnvRecord:
    """Resolve and type-convert environment variables.

    Each default is both a fallback and a type declaration: numbers,
    booleans, lists and JSON objects are parsed accordingly, and keys
    without a default stay strings.

    Args:
        keys: Names to resolve, in the order they are checked.
        defaults: Fallback value per key; None is not an allowed default.
        validator: Called as ``validator(key, value)`` after conversion.
        delimiter: Separator for list values.
        array_types: Element type per list key, for empty list defaults.
        env_file: Optional .env file overlaid beneath the environment.
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        An immutable EnvRecord.

    Raises:
        EnvValidationError: For the first key that fails.
        InvalidOptionsError: If the options are malformed.
        FileNotFoundError: If ``env_file`` doesn't exist.

    Example:
        env = tinyenv(
            ["PORT", "DEBUG", "HOSTS"],
            defaults={"PORT": 3000, "DEBUG": False, "HOSTS": []},
        )
        env.PORT  # 3000, or the int value of $PORT
    """
    schema = TinyEnvSchema(
        keys,
        {
            "defaults": dict(defaults or {}),
            "validator": validator,
            "delimiter": delimiter,
            "array_types": dict(array_types or {}),
        },
    )
    return schema.parse(load_environ(env_file, environ))
