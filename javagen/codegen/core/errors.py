"""
Exception taxonomy for Java source generation.

Argument problems are raised synchronously at the point of misuse,
destination I/O failures are left as the ``OSError`` the destination raised.
"""

from typing import Any


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class InvalidArgumentError(GeneratorError, ValueError):
    """Malformed or missing construction input."""

    pass


class InvalidStateError(GeneratorError, RuntimeError):
    """A writer was driven out of order (e.g. a package pushed twice)."""

    pass


class RenderInvariantError(GeneratorError, AssertionError):
    """Rendering failed where failure is impossible (in-memory buffers)."""

    pass


def check_argument(condition: bool, message: str, *args: Any) -> None:
    """Raise InvalidArgumentError with a %-formatted message unless condition holds."""
    if not condition:
        raise InvalidArgumentError(message % args if args else message)


def check_not_none(value: Any, message: str, *args: Any) -> Any:
    """Return value, or raise InvalidArgumentError if it is None."""
    if value is None:
        raise InvalidArgumentError(message % args if args else message)
    return value


def check_state(condition: bool, message: str, *args: Any) -> None:
    if not condition:
        raise InvalidStateError(message % args if args else message)
