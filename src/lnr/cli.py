"""Main CLI entry point for lnr."""

import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from lnr import __version__
from lnr.config import load_config
from lnr.core.context import LnrContext
from lnr.core.exceptions import ConfigError, LnrError
from lnr.core.output import OutputFormat, mask_secret


CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}


class OutputFormatType(click.ParamType):
    """Custom Click parameter type for output format."""

    name = "format"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        try:
            return OutputFormat(value.lower())
        except ValueError:
            self.fail(
                f"Invalid format '{value}'. Choose from: table, json, yaml",
                param,
                ctx,
            )


OUTPUT_FORMAT = OutputFormatType()


def print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"lnr version {__version__}")
    ctx.exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    metavar="FILE",
    envvar="LNR_CONFIG",
    help="Path to config file",
)
@click.option(
    "-o",
    "--org",
    "organization",
    metavar="NAME",
    envvar="LNR_ORG",
    help="Organization to use; prompted for when several are configured",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=OUTPUT_FORMAT,
    metavar="FORMAT",
    help="Output format: table, json, yaml",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for info, -vvv for debug)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress non-essential output",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Render templates and resolve metadata without creating issues",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored output",
)
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    organization: str | None,
    output_format: OutputFormat | None,
    verbose: int,
    quiet: bool,
    dry_run: bool,
    no_color: bool,
) -> None:
    """lnr - a tiny Linear client.

    Creates parent issues and their children from TOML templates.

    \b
    Examples:
        lnr template evaluate -p sprint.toml
        lnr template evaluate -p templates/ -e Engineering -s Todo -r 2
        lnr --org acme template evaluate -p onboarding.toml --noproject
        lnr issue list -e Engineering

    \b
    Configuration:
        ~/.lnr/config.yaml    User configuration
        ./lnr.yaml            Project configuration
        LINEAR_API_KEY        API key when no organization is configured
    """
    try:
        config = load_config(config_file)

        ctx.obj = LnrContext(
            config=config,
            organization=organization,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            dry_run=dry_run,
            color=not no_color,
        )
        ctx.call_on_close(ctx.obj.close)

        if ctx.obj.dry_run and not quiet:
            ctx.obj.output.print_warning("Dry-run mode enabled - no issues will be created")

    except ConfigError as e:
        console = Console(stderr=True)
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)


def register_commands() -> None:
    """Register all command groups."""
    from lnr.commands.issue import issue
    from lnr.commands.org import org
    from lnr.commands.template import template

    cli.add_command(template)
    cli.add_command(issue)
    cli.add_command(org)


register_commands()


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    lnr_ctx: LnrContext = ctx.obj
    settings = lnr_ctx.config.global_settings
    config_data = {
        "organization": lnr_ctx.organization or "-",
        "output_format": lnr_ctx.output_format.value,
        "dry_run": lnr_ctx.dry_run,
        "verbose": lnr_ctx.verbose,
        "spinners": settings.spinners,
        "linear_url": lnr_ctx.config.linear.get_url(),
        "timeout": lnr_ctx.config.linear.timeout,
        "organizations": ", ".join(
            f"{name} ({mask_secret(org.get_token()) or 'no token'})"
            for name, org in sorted(lnr_ctx.config.organizations.items())
        )
        or "-",
    }
    lnr_ctx.output.print_data(config_data, title="Current Configuration")


def main() -> None:
    """Main entry point.

    Exits 130 on Ctrl-C, 2 on usage errors and 1 on any other failure.
    """
    console = Console(stderr=True)
    try:
        code = cli(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort as e:
        if isinstance(e.__cause__, KeyboardInterrupt):
            console.print("\n[yellow]Interrupted[/yellow]")
            sys.exit(130)
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except LnrError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)

    if isinstance(code, int) and code:
        sys.exit(code)


if __name__ == "__main__":
    main()
