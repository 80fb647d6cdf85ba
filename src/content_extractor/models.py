"""Data models for metadata extracted from page markup."""

from dataclasses import dataclass, field
from typing import List

# Scheme for cross-page references resolved by title rather than URL
CONFLUENCE_LINK_SCHEME = "confluence://"


@dataclass(frozen=True)
class Heading:
    """A heading element, used to build a table of contents.

    Attributes:
        level: Heading level, 1 to 6
        text: Concatenated text of the heading's descendants
    """
    level: int
    text: str


@dataclass(frozen=True)
class ImageReference:
    """An image referenced by a page.

    Attributes:
        alt_text: Alternative text (empty for wiki attachment references)
        filename: ``src`` of an img element, or an attachment filename
            with any query suffix removed
    """
    alt_text: str
    filename: str


@dataclass(frozen=True)
class LinkReference:
    """A link found in a page.

    Attributes:
        text: Link text (the page title for wiki page references)
        target: href, or ``confluence://<title>`` for wiki page references
    """
    text: str
    target: str

    @property
    def is_page_reference(self) -> bool:
        return self.target.startswith(CONFLUENCE_LINK_SCHEME)


@dataclass
class PageMetadata:
    """Headings, images and links extracted from one piece of markup."""
    headings: List[Heading] = field(default_factory=list)
    images: List[ImageReference] = field(default_factory=list)
    links: List[LinkReference] = field(default_factory=list)
