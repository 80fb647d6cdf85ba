"""Typed exception hierarchy for Confluence-related errors.

This module defines the custom exceptions raised by the Confluence client
and the content pipeline. All exceptions inherit from AtlasError so the CLI
can catch any application-level failure in one place, and each carries a
descriptive message with enough context to debug the failure.
"""

from typing import Optional


class AtlasError(Exception):
    """Base exception for all atlas-cli errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class ConfluenceError(AtlasError):
    """Base exception for all Confluence-related errors."""
    pass


class InvalidCredentialsError(ConfluenceError):
    """Raised when API credentials are missing, invalid, or rejected."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"API token is invalid or missing (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(ConfluenceError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class AttachmentNotFoundError(ConfluenceError):
    """Raised when a page has no attachment with the requested filename."""

    def __init__(self, page_id: str, filename: str):
        super().__init__(f"attachment not found: {filename} (page {page_id})")
        self.page_id = page_id
        self.filename = filename


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(ConfluenceError):
    """Raised when API access fails after retries or due to access restrictions."""

    def __init__(self, message: str = "Confluence API failure (after 3 retries)",
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConversionError(ConfluenceError):
    """Raised when content conversion between formats fails."""

    def __init__(self, message: str):
        super().__init__(message)
