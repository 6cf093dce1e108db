"""Centralized error handler for the gqlcompose command."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from gqlcompose.utils.logging import logger


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns unexpected crashes into a logged ClickException.

    Click's own exceptions and ``SystemExit`` pass through untouched so
    exit codes chosen by the command are preserved.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Inner wrapper that implements the try-except logic."""
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            raise click.ClickException(f"{error_type}: {error_msg}") from e

    return wrapper
