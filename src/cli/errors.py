"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError and carry a message that can be shown
to the user as-is.
"""

from typing import Optional

from src.confluence_client.errors import AtlasError


class CLIError(AtlasError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when the configuration file cannot be read or is invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class InvalidArgumentError(CLIError):
    """Raised when command arguments are missing or inconsistent."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint
