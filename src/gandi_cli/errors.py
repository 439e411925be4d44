"""Errors raised by the Gandi CLI.

Every failure that reaches the command line is a :class:`GandiError`; the
entrypoint prints ``str(error)`` to stderr and exits with status 1.
"""

from __future__ import annotations

from typing import Optional


class GandiError(Exception):
    """Raised when the CLI encounters an expected error condition."""


class ConfigIOError(GandiError):
    """Raised when the configuration file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Io Error: unable to read configuration file {path}: {reason}")
        self.path = path
        self.reason = reason


class TransportError(GandiError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Http Transport Error: {reason}")
        self.reason = reason


class HttpStatusError(GandiError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status: str, body: str) -> None:
        super().__init__(f"Api Error {status}: {body}")
        self.status = status
        self.body = body


_FORMAT_LABELS = {
    "json": "Json",
    "yaml": "Yaml",
    "toml": "Toml",
}


class SerializationError(GandiError):
    """Raised when a payload cannot be encoded or decoded in a given format."""

    def __init__(self, fmt: str, message: str, *, path: Optional[str] = None) -> None:
        label = _FORMAT_LABELS.get(fmt, fmt.capitalize())
        if path:
            text = f"{label} Formatting Error in {path}: {message}"
        else:
            text = f"{label} Formatting Error: {message}"
        super().__init__(text)
        self.fmt = fmt
        self.message = message
        self.path = path
