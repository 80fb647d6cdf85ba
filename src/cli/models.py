"""Data models for CLI operations.

This module defines the data models used by the CLI module. All models use
dataclasses, following the patterns established in the other packages.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, validation failures)
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> raise typer.Exit(ExitCode.AUTH_ERROR)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


# Column widths for truncated titles in tables
TITLE_TRUNCATE_SHORT = 40
TITLE_TRUNCATE_NORMAL = 50
TITLE_TRUNCATE_LONG = 60

DEFAULT_LIMIT = 25
DEFAULT_CHILDREN_LIMIT = 50


@dataclass
class AppConfig:
    """Application configuration, built once per invocation.

    The root command loads this and hands it to every subcommand through
    the typer context, so no command reads configuration on its own.

    Attributes:
        confluence_url: Confluence base URL (e.g., https://wiki.example.com)
        user: User for basic auth; None selects bearer-token auth
        api_token: API token or personal access token
        default_space: Space used when a command needs one and none is given
        cloud: Whether the server is Confluence Cloud
        timeout: HTTP timeout in seconds
        max_retries: Retries on HTTP 429
        limit: Default result limit for listings and search
        children_limit: Default result limit for child page listings
    """
    confluence_url: Optional[str] = None
    user: Optional[str] = None
    api_token: Optional[str] = None
    default_space: Optional[str] = None
    cloud: bool = False
    timeout: int = 30
    max_retries: int = 3
    limit: int = DEFAULT_LIMIT
    children_limit: int = DEFAULT_CHILDREN_LIMIT


def truncate(text: str, max_len: int) -> str:
    """Shorten ``text`` to ``max_len`` characters, ending with '...'."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."
