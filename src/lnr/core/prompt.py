"""Interactive selection and text prompts."""

from typing import Callable, Protocol, Sequence, TypeVar

import click
from rich.console import Console

from lnr.core.exceptions import PromptCancelledError, ValidationError

T = TypeVar("T")


class Prompt(Protocol):
    """What the rest of lnr needs from an interactive prompt."""

    def select(
        self,
        message: str,
        options: Sequence[T],
        label: Callable[[T], str] = str,
    ) -> T: ...

    def text(self, message: str) -> str: ...


class ConsolePrompt:
    """Numbered-list prompt rendered with Rich and read through click."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def select(
        self,
        message: str,
        options: Sequence[T],
        label: Callable[[T], str] = str,
    ) -> T:
        """Ask the user to pick one of ``options``.

        Raises:
            ValidationError: If there is nothing to choose from
            PromptCancelledError: If the user aborts (Ctrl-C / EOF)
        """
        if not options:
            raise ValidationError(f"{message}: no options available")

        self._console.print(f"[bold]{message}[/bold]")
        for i, option in enumerate(options, start=1):
            self._console.print(f"  {i}. {label(option)}")

        try:
            index = click.prompt(
                "Choice",
                type=click.IntRange(1, len(options)),
                default=1,
            )
        except click.Abort as e:
            raise PromptCancelledError(f"{message}: cancelled") from e
        return options[index - 1]

    def text(self, message: str) -> str:
        """Ask the user for a line of text."""
        try:
            value = click.prompt(message, type=str)
        except click.Abort as e:
            raise PromptCancelledError(f"{message}: cancelled") from e
        return value.strip()
