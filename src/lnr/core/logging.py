"""Logging for lnr.

Records go to stderr through Rich, so they never mix with the issue links and
tables printed on stdout. Module loggers append ``key=value`` context, e.g.
``Created issue [identifier=ENG-7 parent=-]``.
"""

import logging
from enum import Enum
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers that log every request at INFO
QUIET_LIBRARIES = ("httpx", "httpcore")

_handler: logging.Handler | None = None


class LogLevel(str, Enum):
    """Log level names accepted in config files."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def levelno(self) -> int:
        return logging.getLevelName(self.value.upper())


def level_for(verbose: int, quiet: bool, configured: LogLevel) -> LogLevel:
    """Pick the level from ``-v``/``-q``; the config file decides otherwise."""
    if verbose >= 3:
        return LogLevel.DEBUG
    if verbose >= 1:
        return LogLevel.INFO
    if quiet:
        return LogLevel.ERROR
    return configured


def setup_logging(level: LogLevel = LogLevel.WARNING, color: bool = True) -> None:
    """Route lnr's log records to stderr at ``level``.

    Calling it again replaces the handler installed by the previous call.
    """
    global _handler

    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)

    _handler = RichHandler(
        console=Console(stderr=True, no_color=not color),
        show_time=level == LogLevel.DEBUG,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    _handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(_handler)

    logging.getLogger("lnr").setLevel(level.levelno)
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> "StructuredLogger":
    """Get a structured logger for a module (pass ``__name__``)."""
    return StructuredLogger(name)


class StructuredLogger:
    """Logger that appends bound and per-call context to each message."""

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        if not name.startswith("lnr"):
            name = f"lnr.{name}"
        self._logger = logging.getLogger(name)
        self._context = context or {}

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Create a logger that adds ``kwargs`` to every message."""
        return StructuredLogger(self._logger.name, {**self._context, **kwargs})

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def _log(self, level: int, message: str, kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._context, **kwargs}
        if context:
            message = f"{message} [{' '.join(f'{k}={_format_value(v)}' for k, v in context.items())}]"
        self._logger.log(level, message)


def _format_value(value: Any) -> str:
    text = str(value)
    return repr(text) if " " in text else text
