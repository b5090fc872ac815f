"""Failure reporting for native-properties commands.

stdout carries the tag only, so a failed command renders its reason on
stderr and exits with status 1.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from native_properties.errors import NativePropertiesError

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def format_failure(command: str, error: Exception) -> str:
    """Describe why ``command`` failed.

    Detection errors carry a user-facing message; anything else is a bug and
    is named by its type.
    """
    if isinstance(error, NativePropertiesError):
        return f"{command}: {error}"
    return f"{command}: unexpected {type(error).__name__}: {error}"


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Turn any exception raised by a command into a stderr panel and exit 1.

    Args:
        command: CLI command name, e.g. "detect"
        title: Panel title

    """
    try:
        yield
    except Exception as e:
        message = format_failure(command, e)
        logger.debug("%s failed", command, exc_info=e)
        console.print(Panel(f"[red]{escape(message)}[/red]", title=title, border_style="red"))
        raise typer.Exit(1) from e
