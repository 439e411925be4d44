"""Command-line client for the Gandi v5 REST API."""

__all__ = ["api", "cli", "command", "config", "display", "errors", "logging", "params"]
__version__ = "0.1.0"

NAME = "gandi"
