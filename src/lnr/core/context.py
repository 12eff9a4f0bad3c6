"""Click context object for sharing state across commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lnr.config import LnrConfig, get_default_config, token_from_env
from lnr.core.exceptions import AuthenticationError
from lnr.core.logging import StructuredLogger, level_for, setup_logging
from lnr.core.output import OutputFormat, OutputFormatter
from lnr.core.progress import spinners_enabled
from lnr.core.prompt import ConsolePrompt, Prompt

if TYPE_CHECKING:
    from lnr.clients.linear import LinearClient


class LnrContext:
    """Shared context object for lnr commands.

    This object is passed through Click's context mechanism and provides
    access to configuration, the Linear client and terminal I/O.
    """

    def __init__(
        self,
        config: LnrConfig | None = None,
        organization: str | None = None,
        output_format: OutputFormat | None = None,
        verbose: int = 0,
        quiet: bool = False,
        dry_run: bool = False,
        color: bool = True,
        prompt: Prompt | None = None,
    ):
        self._config = config or get_default_config()
        self._organization = organization

        # Output settings (CLI overrides config)
        self._output_format = output_format or self._config.global_settings.output_format
        self._verbose = verbose
        self._quiet = quiet
        self._dry_run = dry_run or self._config.global_settings.dry_run
        self._color = color and self._config.global_settings.color != "never"

        setup_logging(
            level_for(verbose, quiet, self._config.global_settings.verbosity),
            color=self._color,
        )
        self._logger = StructuredLogger("context")

        self._output = OutputFormatter(
            format=self._output_format,
            color=self._color,
            quiet=quiet,
        )
        self._prompt = prompt or ConsolePrompt(self._output.console)

        # Lazy-loaded client
        self._linear_client: LinearClient | None = None

    @property
    def config(self) -> LnrConfig:
        """Get the loaded configuration."""
        return self._config

    @property
    def organization(self) -> str | None:
        """Get the organization selected on the command line."""
        return self._organization

    @property
    def output(self) -> OutputFormatter:
        """Get the output formatter."""
        return self._output

    @property
    def output_format(self) -> OutputFormat:
        """Get the output format."""
        return self._output_format

    @property
    def prompt(self) -> Prompt:
        """Get the interactive prompt."""
        return self._prompt

    @property
    def dry_run(self) -> bool:
        """Check if dry-run mode is enabled."""
        return self._dry_run

    @property
    def verbose(self) -> int:
        """Get verbosity level."""
        return self._verbose

    @property
    def quiet(self) -> bool:
        """Check if quiet mode is enabled."""
        return self._quiet

    @property
    def logger(self) -> StructuredLogger:
        """Get the context logger."""
        return self._logger

    @property
    def linear(self) -> "LinearClient":
        """Get or create the Linear client."""
        if self._linear_client is None:
            from lnr.clients.linear import LinearClient

            self._linear_client = LinearClient(
                self._config.linear,
                self.resolve_token(),
                spinners=spinners_enabled(self._config.global_settings.spinners) and not self._quiet,
            )
        return self._linear_client

    def resolve_token(self) -> str:
        """Find the API key for this invocation.

        Order: ``--org``, then the environment, then the only configured
        organization, then a prompt over the configured organizations.
        """
        if self._organization:
            token = self._config.get_organization(self._organization).get_token()
            if not token:
                raise AuthenticationError(f"No API key for organization '{self._organization}'")
            return token

        token = token_from_env()
        if token:
            return token

        names = self._config.organization_names()
        if not names:
            raise AuthenticationError(
                "No Linear API key found",
                {"hint": "set LINEAR_API_KEY or add organizations to ~/.lnr/config.yaml"},
            )

        name = names[0] if len(names) == 1 else self._prompt.select("Select an organization", names)
        self._logger.debug("Using organization", name=name)
        token = self._config.get_organization(name).get_token()
        if not token:
            raise AuthenticationError(f"No API key for organization '{name}'")
        return token

    def close(self) -> None:
        """Release the HTTP client, if one was created."""
        if self._linear_client is not None:
            self._linear_client.close()
            self._linear_client = None


# Click decorator for passing context
pass_context = click.make_pass_decorator(LnrContext, ensure=True)
