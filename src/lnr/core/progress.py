"""Progress indicator utilities for remote calls."""

import os
from contextlib import contextmanager
from typing import Generator

from rich.console import Console

console = Console(stderr=True)

SPINNER_MESSAGE = "Querying API"


def spinners_enabled(configured: bool = True) -> bool:
    """Check whether spinners should be shown.

    The ``DISABLE_SPINNER`` environment variable always wins over config.
    """
    if "DISABLE_SPINNER" in os.environ:
        return False
    return configured


@contextmanager
def spinner(
    message: str = SPINNER_MESSAGE,
    enabled: bool = True,
    error_message: str | None = None,
) -> Generator[None, None, None]:
    """Simple spinner context manager.

    Args:
        message: Message to display while spinning
        enabled: When False, the block runs without any terminal output
        error_message: Message to display on error

    Yields:
        Nothing - just displays spinner during operation
    """
    if not enabled or not console.is_terminal:
        yield
        return

    status = console.status(message, spinner="dots")
    status.start()
    try:
        yield
    except Exception:
        status.stop()
        if error_message:
            console.print(f"[red]✗[/red] {error_message}")
        raise
    else:
        status.stop()
