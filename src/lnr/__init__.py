"""lnr - a small Linear client that creates issue hierarchies from templates."""

__version__ = "0.3.0"
