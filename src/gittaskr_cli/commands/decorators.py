"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from gittaskr_cli.models import (
    ConstraintViolation,
    NotFoundError,
    SchemaError,
    StorageError,
    ValidationError,
)
from gittaskr_cli.utils.exit_codes import (
    ERROR_CONSTRAINT,
    ERROR_GENERAL,
    ERROR_INTERRUPTED,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    get_exit_code_description,
    get_exit_code_name,
)
from gittaskr_cli.utils.logger import get_logger
from gittaskr_cli.utils.ui.formatters import format_error, format_info, format_warning

# Checked in order; SchemaError must precede StorageError
ERROR_HANDLERS: list[tuple[type[Exception], str, int]] = [
    (ValidationError, "Invalid input: {}", ERROR_INVALID_ARGS),
    (ConstraintViolation, "{}", ERROR_CONSTRAINT),
    (NotFoundError, "{}", ERROR_NOT_FOUND),
    (SchemaError, "Cannot initialize database: {}", ERROR_STORAGE),
    (StorageError, "Database error: {}", ERROR_STORAGE),
]


def command_wrapper(func: Callable):
    """Wrap a command with logging, async execution and error mapping.

    Known gittaskr errors are reported with their own message and exit code;
    anything else is logged with a traceback and exits with code 1.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except (KeyboardInterrupt, EOFError, typer.Abort) as e:
            logger.warning("command interrupted: %s", cmd)
            format_warning("Operation cancelled")
            raise typer.Exit(code=ERROR_INTERRUPTED) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            for error_type, template, exit_code in ERROR_HANDLERS:
                if isinstance(e, error_type):
                    logger.error(
                        "command failed: %s (%.3fs) - %s: %s [%s]",
                        cmd,
                        elapsed,
                        type(e).__name__,
                        e,
                        get_exit_code_name(exit_code),
                    )
                    format_error(template.format(e))
                    if exit_code == ERROR_STORAGE:
                        format_info(get_exit_code_description(exit_code))
                    raise typer.Exit(code=exit_code) from e

            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
