"""Metadata extraction from Confluence page markup.

Provides headings (for tables of contents), image references (for
downloading and rehoming images) and links from storage or view format.
"""

from .extractor import extract, extract_headings, extract_images, extract_links
from .models import Heading, ImageReference, LinkReference, PageMetadata

__all__ = [
    'extract',
    'extract_headings',
    'extract_images',
    'extract_links',
    'Heading',
    'ImageReference',
    'LinkReference',
    'PageMetadata',
]
