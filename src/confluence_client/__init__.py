"""Confluence client library for atlas-cli.

This package provides Python abstractions over the Confluence REST API
(content, spaces, search and attachments) with typed errors, credential
loading and rate-limit retries.
"""

from .errors import (
    AtlasError,
    ConfluenceError,
    InvalidCredentialsError,
    PageNotFoundError,
    AttachmentNotFoundError,
    APIUnreachableError,
    APIAccessError,
    ConversionError,
)

__all__ = [
    "AtlasError",
    "ConfluenceError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "AttachmentNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "ConversionError",
]
