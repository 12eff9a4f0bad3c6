"""Custom exceptions for lnr."""

from pathlib import Path
from typing import Any


class LnrError(Exception):
    """Base exception for all lnr errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ConfigError(LnrError):
    """Configuration-related errors."""

    pass


class ValidationError(LnrError):
    """Input validation errors."""

    pass


class AuthenticationError(LnrError):
    """Missing or rejected credentials."""

    pass


class ParseError(LnrError):
    """Malformed or incomplete template file."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        text = super().__str__()
        if self.path:
            return f"{self.path}: {text}"
        return text


class NotFoundError(LnrError):
    """Input path does not exist."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class RenderError(LnrError):
    """Variable substitution failed."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.key = key


class RemoteError(LnrError):
    """Linear API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code


class PromptCancelledError(LnrError):
    """User aborted an interactive selection."""

    pass
