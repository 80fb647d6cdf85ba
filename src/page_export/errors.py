"""Typed exception hierarchy for page export errors."""

from typing import Optional

from src.confluence_client.errors import AtlasError


class PageExportError(AtlasError):
    """Base exception for all page export errors."""
    pass


class UnsupportedFormatError(PageExportError):
    """Raised when an unknown output format is requested."""

    def __init__(self, output_format: str):
        super().__init__(
            f"unsupported format: {output_format} (supported: html, markdown, md, storage)"
        )
        self.output_format = output_format


class ImageDirectoryError(PageExportError):
    """Raised when the directory for downloaded images cannot be created."""

    def __init__(self, directory: str, reason: Optional[str] = None):
        message = f"failed to create image directory {directory}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.directory = directory
        self.reason = reason
