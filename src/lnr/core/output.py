"""Output formatting utilities using Rich."""

import json
from enum import Enum
from typing import Any

import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from tabulate import tabulate

console = Console()
error_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Supported output formats."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


class OutputFormatter:
    """Handles output formatting for CLI commands."""

    def __init__(
        self,
        format: OutputFormat = OutputFormat.TABLE,
        color: bool = True,
        quiet: bool = False,
    ):
        self.format = format
        self.color = color
        self.quiet = quiet
        self._console = Console(force_terminal=color, no_color=not color, highlight=False)

    @property
    def console(self) -> Console:
        return self._console

    def print(self, message: str, style: str | None = None) -> None:
        """Print a message to stdout."""
        if self.quiet:
            return
        self._console.print(message, style=style)

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        error_console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        if self.quiet:
            return
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        if self.quiet:
            return
        self._console.print(f"[green]✓[/green] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        if self.quiet:
            return
        self._console.print(f"[blue]ℹ[/blue] {message}")

    def print_data(
        self,
        data: list[dict[str, Any]] | dict[str, Any],
        headers: list[str] | None = None,
        title: str | None = None,
    ) -> None:
        """Print data in the configured format."""
        if self.format == OutputFormat.JSON:
            self._print_json(data)
        elif self.format == OutputFormat.YAML:
            self._print_yaml(data)
        elif self.color:
            self._print_table(data, headers, title)
        else:
            self._print_plain(data, headers)

    def _print_json(self, data: Any) -> None:
        """Print data as JSON."""
        json_str = json.dumps(data, indent=2, default=str)
        if self.color:
            self._console.print(Syntax(json_str, "json", theme="monokai"))
        else:
            print(json_str)

    def _print_yaml(self, data: Any) -> None:
        """Print data as YAML."""
        yaml_str = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        if self.color:
            self._console.print(Syntax(yaml_str, "yaml", theme="monokai"))
        else:
            print(yaml_str)

    def _print_plain(
        self,
        data: list[dict[str, Any]] | dict[str, Any],
        headers: list[str] | None = None,
    ) -> None:
        """Print data as a plain text table for uncolored terminals."""
        if isinstance(data, dict):
            print(tabulate([(k, v) for k, v in data.items()], headers=["Field", "Value"]))
        elif data:
            headers = headers or list(data[0].keys())
            rows = [[row.get(h, "") for h in headers] for row in data]
            print(tabulate(rows, headers=headers))
        else:
            print("No data to display")

    def _print_table(
        self,
        data: list[dict[str, Any]] | dict[str, Any],
        headers: list[str] | None = None,
        title: str | None = None,
    ) -> None:
        """Print data as a formatted table."""
        if isinstance(data, dict):
            # Single record - display as key-value pairs
            table = Table(title=title, show_header=True, header_style="bold cyan")
            table.add_column("Field", style="dim")
            table.add_column("Value")
            for key, value in data.items():
                table.add_row(str(key), Text(str(value)))
            self._console.print(table)
        elif isinstance(data, list) and len(data) > 0:
            if headers is None:
                headers = list(data[0].keys())

            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)

            for row in data:
                table.add_row(*[Text(str(row.get(h, ""))) for h in headers])

            self._console.print(table)
        else:
            self._console.print("[dim]No data to display[/dim]")


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Mask all but the last few characters of a secret."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
