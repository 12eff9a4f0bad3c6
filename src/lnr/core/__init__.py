"""Core utilities and shared components for lnr."""

# Note: Import context lazily to avoid circular imports
# Use: from lnr.core.context import LnrContext, pass_context
from lnr.core.exceptions import (
    LnrError,
    ConfigError,
    NotFoundError,
    ParseError,
    PromptCancelledError,
    RemoteError,
    RenderError,
)
from lnr.core.output import OutputFormatter, console

__all__ = [
    "LnrError",
    "ConfigError",
    "NotFoundError",
    "ParseError",
    "PromptCancelledError",
    "RemoteError",
    "RenderError",
    "OutputFormatter",
    "console",
]
