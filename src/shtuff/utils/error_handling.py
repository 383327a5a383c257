"""
Error taxonomy and failure reporting for shtuff.

Every public entry point (watch, render, cancel, the file operations) raises
one of the exceptions below. The ``reports_failures`` decorator prints a
single red line for a failure before letting the exception propagate, so a
calling script sees the problem on the terminal and can still branch on the
exception type. Nothing here ever retries.
"""

import functools
from typing import Any, Callable, Dict, Optional

from .logging import get_logger


class ShtuffError(Exception):
    """Base exception for all shtuff errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.reported = False


class ArgumentError(ShtuffError, ValueError):
    """A handle, style or numeric input is missing or malformed."""
    pass


class UnknownStyleError(ArgumentError):
    """An indicator style name is not in the registry."""
    pass


class NotFoundError(ShtuffError, LookupError):
    """A handle, path or command does not refer to anything that exists."""
    pass


class RangeError(ShtuffError, ValueError):
    """A numeric input is well-formed but outside its allowed range."""
    pass


class TaskTerminationError(ShtuffError, OSError):
    """A termination request could not be delivered to a task."""
    pass


class OperationError(ShtuffError):
    """A file operation failed part-way through."""
    pass


class ConfigurationError(ShtuffError):
    """Configuration-related error."""
    pass


class TaskFailure(ShtuffError):
    """A watched task finished with a nonzero exit code.

    The monitor itself never raises this; it returns the exit code. Callers
    that prefer exceptions (the file operations) raise it with the real code
    attached.
    """

    def __init__(self, message: str, exit_code: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.exit_code = exit_code


def _resolve_terminal(args: tuple, kwargs: Dict[str, Any]):
    terminal = kwargs.get("terminal")
    if terminal is None and args:
        terminal = getattr(args[0], "terminal", None)
    if terminal is None:
        from ..ui.terminal import Terminal
        terminal = Terminal()
    return terminal


def reports_failures(operation_name: str):
    """
    Decorator that reports shtuff errors raised by a public entry point.

    The terminal used for reporting is taken from a ``terminal`` keyword
    argument, or from ``self.terminal`` when decorating a method, falling back
    to a default ``Terminal``. An error is reported at most once even when
    decorated calls are nested. ``TaskFailure`` is not reported here because
    the failure label of the watch already told the user.

    Args:
        operation_name: Prefix used in the printed message
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger = get_logger(f"shtuff.{operation_name}")
            try:
                return func(*args, **kwargs)
            except TaskFailure:
                raise
            except ShtuffError as e:
                if not e.reported:
                    logger.debug(f"{operation_name} failed: {e.message}")
                    _resolve_terminal(args, kwargs).error(f"{operation_name}: {e.message}")
                    e.reported = True
                raise

        return wrapper

    return decorator


def validate_count(value: Any, field_name: str, required: bool = True) -> Optional[int]:
    """
    Validate a counter argument and return it as an ``int``.

    Accepts integers (but not booleans) and strings of decimal digits.

    Raises:
        ArgumentError: If the value is missing or not numeric
    """
    if value is None:
        if required:
            raise ArgumentError(f"{field_name} is required")
        return None

    if isinstance(value, bool):
        raise ArgumentError(f"{field_name} must be an integer, got bool")

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text)
        if text.startswith("-") and text[1:].isdigit():
            return int(text)
        raise ArgumentError(f"{field_name} must be an integer, got {value!r}")

    raise ArgumentError(
        f"{field_name} must be an integer, got {type(value).__name__}"
    )
