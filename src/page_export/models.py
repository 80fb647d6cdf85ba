"""Data models for page export."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .errors import UnsupportedFormatError


class OutputFormat(str, Enum):
    """Formats the page view command can render.

    ``md`` is accepted as an alias of ``markdown``.
    """
    MARKDOWN = "markdown"
    STORAGE = "storage"
    HTML = "html"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        normalized = (value or "").strip().lower()
        if normalized == "md":
            return cls.MARKDOWN
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedFormatError(value)


@dataclass
class RehomeResult:
    """Outcome of downloading a page's images next to an output file.

    Attributes:
        markdown: Markdown body with references to downloaded images rewritten
        downloaded: filename -> path relative to the output file's directory
        failed: filename -> reason the fetch or write failed
        image_dir: Directory the images were written to (empty if none)
    """
    markdown: str
    downloaded: Dict[str, str] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)
    image_dir: str = ""
