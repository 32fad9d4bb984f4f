"""Exceptions raised while assembling the site configuration."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Invalid configuration value with optional file context.

    Attributes:
        message: Human-readable error message.
        source_path: Path to the configuration file that caused the error, if any.
    """

    def __init__(self, message: str, source_path: Path | None = None):
        self.message = message
        self.source_path = source_path
        if source_path is not None:
            super().__init__(f"{source_path}: {message}")
        else:
            super().__init__(message)
