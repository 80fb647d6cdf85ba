"""Metadata extraction from storage-format and view-format markup.

Standard HTML elements (headings, images, anchors) are found by walking the
parsed tree. Confluence-specific references (``ri:attachment`` and
``ri:page``) belong to vendor namespaces the HTML parser knows nothing
about, so they are matched lexically against the raw markup instead. Each
extraction therefore runs two passes and concatenates the results, tree
matches first.

Extraction is best-effort: markup that cannot be parsed produces empty
results rather than an error.
"""

import html
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from .models import (
    CONFLUENCE_LINK_SCHEME,
    Heading,
    ImageReference,
    LinkReference,
    PageMetadata,
)

logger = logging.getLogger(__name__)

HEADING_TAG_PATTERN = re.compile(r'^h([1-6])$')

# <ri:attachment ri:filename="image.png" ri:version-at-save="2" />
ATTACHMENT_PATTERN = re.compile(r'<ri:attachment\b[^>]*?\bri:filename="([^"]+)"')

# <ac:link><ri:page ri:space-key="DOC" ri:content-title="Page Title" /></ac:link>
PAGE_REFERENCE_PATTERN = re.compile(r'<ri:page\b[^>]*?\bri:content-title="([^"]+)"')


def _parse(markup: str) -> Optional[BeautifulSoup]:
    """Parse markup into a tree, or return None when there is nothing usable."""
    if not markup:
        return None
    try:
        return BeautifulSoup(markup, "lxml")
    except ParserRejectedMarkup as e:
        logger.debug(f"Markup rejected by parser, skipping extraction: {e}")
        return None


def _is_text_node(node) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _headings_from_tree(soup: BeautifulSoup) -> List[Heading]:
    headings = []
    for element in soup.find_all(HEADING_TAG_PATTERN):
        text = element.get_text()
        if not text.strip():
            continue
        level = int(HEADING_TAG_PATTERN.match(element.name).group(1))
        headings.append(Heading(level=level, text=text))
    return headings


def _images_from_tree(soup: BeautifulSoup) -> List[ImageReference]:
    images = []
    for element in soup.find_all('img'):
        src = element.get('src')
        if src:
            images.append(ImageReference(alt_text=element.get('alt') or '', filename=src))
    return images


def _images_from_markup(markup: str) -> List[ImageReference]:
    images = []
    for match in ATTACHMENT_PATTERN.finditer(markup):
        filename = html.unescape(match.group(1)).split('?', 1)[0]
        images.append(ImageReference(alt_text='', filename=filename))
    return images


def _links_from_tree(soup: BeautifulSoup) -> List[LinkReference]:
    links = []
    for element in soup.find_all('a'):
        href = element.get('href')
        if not href:
            continue
        # Only the first child counts, and only when it is plain text
        first = element.contents[0] if element.contents else None
        text = str(first) if _is_text_node(first) else ''
        links.append(LinkReference(text=text, target=href))
    return links


def _links_from_markup(markup: str) -> List[LinkReference]:
    links = []
    for match in PAGE_REFERENCE_PATTERN.finditer(markup):
        title = html.unescape(match.group(1))
        links.append(LinkReference(text=title, target=CONFLUENCE_LINK_SCHEME + title))
    return links


def extract_headings(markup: str) -> List[Heading]:
    """Extract h1-h6 headings in document order.

    Headings whose text is empty or whitespace-only are skipped.
    """
    soup = _parse(markup)
    if soup is None:
        return []
    return _headings_from_tree(soup)


def extract_images(markup: str) -> List[ImageReference]:
    """Extract image references: img elements, then wiki attachments.

    Duplicates are preserved; the same filename referenced twice yields
    two entries.
    """
    soup = _parse(markup)
    if soup is None:
        return []
    return _images_from_tree(soup) + _images_from_markup(markup)


def extract_links(markup: str) -> List[LinkReference]:
    """Extract links: anchors with an href, then wiki page references."""
    soup = _parse(markup)
    if soup is None:
        return []
    return _links_from_tree(soup) + _links_from_markup(markup)


def extract(markup: str) -> PageMetadata:
    """Extract headings, images and links with a single parse."""
    soup = _parse(markup)
    if soup is None:
        return PageMetadata()
    return PageMetadata(
        headings=_headings_from_tree(soup),
        images=_images_from_tree(soup) + _images_from_markup(markup),
        links=_links_from_tree(soup) + _links_from_markup(markup),
    )
