"""
Unified error handling for OceanHost.

This module provides the error taxonomy and exit codes shared by the
publish hook and the CLI.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Publish error (spec or script could not be written)
- 12: Validation error
- 127: Unknown/internal error
- 130: Publish cancelled
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for the publish command."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PUBLISH_ERROR = 11
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127
    CANCELLED = 130


class OceanHostError(Exception):
    """Base exception for OceanHost errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(OceanHostError):
    """Raised when the application model or settings are unusable."""

    exit_code = ExitCode.CONFIG_ERROR


class PublishError(OceanHostError):
    """Raised when the app spec or deploy script cannot be written."""

    exit_code = ExitCode.PUBLISH_ERROR


class ValidationError(OceanHostError):
    """Raised for invalid input, e.g. an unknown datacenter slug."""

    exit_code = ExitCode.VALIDATION_ERROR


class PublishCancelledError(OceanHostError):
    """Raised when publishing is cancelled before files are written."""

    exit_code = ExitCode.CANCELLED


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for command functions that provides unified error handling.

    Catches exceptions and converts them to appropriate exit codes with
    consistent error reporting.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Usage:
        @main_with_error_handling()
        def publish_command() -> int:
            ...
            return 0

    Exit codes:
        - OceanHostError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except OceanHostError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return ExitCode.CANCELLED
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: OceanHostError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
