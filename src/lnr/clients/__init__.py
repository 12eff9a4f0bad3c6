"""API clients for external services."""

from lnr.clients.linear import LinearClient

__all__ = ["LinearClient"]
