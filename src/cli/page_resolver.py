"""Resolve user-supplied page references to page IDs.

A reference may be a numeric page ID, a page URL, or a page title (which
needs a space key). Supported URL forms:

1. Cloud / new-style: https://host/wiki/spaces/TEAM/pages/123456[/Title]
2. Server viewpage:   https://host/pages/viewpage.action?pageId=123456
3. Server display:    https://host/display/TEAM/Page+Title
"""

import logging
import re
from typing import Optional
from urllib.parse import parse_qs, unquote_plus, urlparse

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import PageNotFoundError

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class PageResolver:
    """Turns page references into page IDs.

    Example:
        >>> resolver = PageResolver(api)
        >>> resolver.resolve("https://wiki.example.com/display/DOC/Home")
        '98765'
    """

    SPACES_PAGE_PATTERN = re.compile(r'/spaces/([^/]+)/pages/(\d+)(?:/.*)?$')
    DISPLAY_PATTERN = re.compile(r'/display/([^/]+)/(.+)$')

    def __init__(self, api: APIWrapper):
        self.api = api

    def resolve(self, ref: str, space_key: Optional[str] = None) -> str:
        """Resolve a reference to a page ID.

        Args:
            ref: Page ID, page URL, or page title
            space_key: Space used to look up titles

        Returns:
            The page ID, or an empty string for an empty reference

        Raises:
            InvalidArgumentError: If a title is given without a space, or a
                URL has no recognizable page
            PageNotFoundError: If no page has the given title
        """
        ref = (ref or "").strip()
        if not ref:
            return ""

        if ref.isdigit():
            return ref

        if ref.startswith(("http://", "https://")):
            return self.resolve_url(ref)

        if not space_key:
            raise InvalidArgumentError(
                "cannot resolve page by title without space "
                "(use --space or provide page ID/URL)"
            )
        return self._lookup_title(space_key, ref)

    def resolve_url(self, url: str) -> str:
        """Extract the page ID from a Confluence URL.

        Display URLs carry a title instead of an ID and cost one lookup.
        """
        parsed = urlparse(url)

        if parsed.path.endswith("viewpage.action"):
            page_ids = parse_qs(parsed.query).get("pageId")
            if page_ids and page_ids[0].isdigit():
                return page_ids[0]

        match = self.SPACES_PAGE_PATTERN.search(parsed.path)
        if match:
            return match.group(2)

        match = self.DISPLAY_PATTERN.search(parsed.path)
        if match:
            space_key = match.group(1)
            title = unquote_plus(match.group(2))
            return self._lookup_title(space_key, title)

        raise InvalidArgumentError(
            f"cannot parse Confluence URL: {url}",
            hint="expected /spaces/SPACE/pages/ID, /display/SPACE/Title "
                 "or /pages/viewpage.action?pageId=ID",
        )

    def _lookup_title(self, space_key: str, title: str) -> str:
        logger.debug(f"Resolving page '{title}' in space {space_key}")
        page = self.api.get_page_by_title(space_key, title)
        if page is None or not page.page_id:
            raise PageNotFoundError(page_id=f"'{title}' in space {space_key}")
        return page.page_id
