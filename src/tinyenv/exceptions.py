"""Exceptions raised while resolving environment variables."""

from typing import Any


class TinyEnvError(Exception):
    """Base exception for tinyenv errors"""  # noqa: D415


class EnvValidationError(TinyEnvError, ValueError):
    """Raised when a declared key cannot be resolved to a valid value.

    Every failure is terminal for the call that raised it; the message is
    the user-facing description and is kept stable for callers that match
    on it.
    """

    def __init__(self, key: str, message: str, value: Any = None) -> None:
        """Initialize the error.

        Args:
            key: The declared key that failed
            message: Human-readable error message
            value: The offending raw value, element or parsed value, if any
        """
        self.key = key
        self.value = value
        self.message = message
        super().__init__(message)


class MissingVariableError(EnvValidationError):
    """Raised when a key has neither a usable value nor a default"""  # noqa: D415

    def __init__(self, key: str) -> None:  # noqa: D107
        super().__init__(key, f"Missing environment variable: {key}")


class InvalidDefaultError(EnvValidationError):
    """Raised when a key is declared with an unset (None) default"""  # noqa: D415

    def __init__(self, key: str) -> None:  # noqa: D107
        super().__init__(
            key, f"Invalid default value for key {key}: undefined is not allowed"
        )


class NumberParseError(EnvValidationError):
    """Raised when a value cannot be read as a number"""  # noqa: D415

    def __init__(self, key: str, value: Any) -> None:  # noqa: D107
        super().__init__(key, f"Failed to parse {key} as number: {value}", value)


class BooleanParseError(EnvValidationError):
    """Raised when a value is not one of the accepted boolean spellings"""  # noqa: D415

    def __init__(self, key: str, value: Any) -> None:  # noqa: D107
        super().__init__(key, f"Failed to parse {key} as boolean: {value}", value)


class ArrayElementParseError(EnvValidationError):
    """Raised when a single array element fails conversion."""

    def __init__(self, key: str, element: str, element_type: str) -> None:  # noqa: D107
        self.element_type = element_type
        super().__init__(
            key,
            f"Failed to parse {key} array element as {element_type}: {element}",
            element,
        )


class JsonParseError(EnvValidationError):
    """Raised when an object-typed value is not a valid JSON document"""  # noqa: D415

    def __init__(self, key: str, value: Any, reason: str) -> None:  # noqa: D107
        self.reason = reason
        super().__init__(key, f"Failed to parse {key} as JSON: {reason}", value)


class MissingPropertyError(EnvValidationError):
    """Raised when a parsed object lacks a property present in its default."""

    def __init__(self, key: str, path: str) -> None:  # noqa: D107
        self.path = path
        super().__init__(key, f"Missing required property {path}")


class TypeMismatchError(EnvValidationError):
    """Raised when a parsed property has a different type than its default."""

    def __init__(self, key: str, path: str, expected: str, actual: str) -> None:  # noqa: D107
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            key, f"Invalid type for {path}: expected {expected}, got {actual}"
        )


class CustomValidationError(EnvValidationError):
    """Raised when a validator callback fails without a message of its own"""  # noqa: D415


class InvalidOptionsError(TinyEnvError, ValueError):
    """Raised when the options bundle itself is malformed"""  # noqa: D415


class AsyncValidationError(TinyEnvError, TypeError):
    """Raised when a validation path produces an awaitable.

    Resolution is synchronous only, so this is an engine fault rather than
    a validation issue and is never reported through an issues list.
    """
