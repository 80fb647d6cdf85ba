"""Commands that write to Confluence: create, edit and delete pages.

Content is taken as Confluence storage format (XHTML), either inline or
from a file. Deleting a page with children needs ``--cascade``, and an
interactive delete asks for the page title before anything is removed.
"""

import logging
from pathlib import Path
from typing import Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.models import ConfluencePage

from .errors import InvalidArgumentError
from .output import OutputHandler
from .page_resolver import PageResolver

logger = logging.getLogger(__name__)

CHILDREN_FETCH_LIMIT = 250


def read_content(content: Optional[str], content_file: Optional[str]) -> Optional[str]:
    """Return inline content, else the content file's text, else None.

    Raises:
        InvalidArgumentError: If the content file cannot be read
    """
    if content:
        return content
    if content_file:
        try:
            return Path(content_file).read_text(encoding="utf-8")
        except OSError as e:
            raise InvalidArgumentError(f"failed to read content file: {e}")
    return None


class _PageWriteCommand:
    def __init__(self, api: APIWrapper, output: OutputHandler, base_url: str = ""):
        self.api = api
        self.output = output
        self.base_url = (base_url or "").rstrip('/')

    def _page_url(self, page: ConfluencePage) -> str:
        return f"{self.base_url}{page.webui_link}"


class CreateCommand(_PageWriteCommand):
    """Handles the ``page create`` command.

    Example:
        >>> cmd = CreateCommand(api, OutputHandler(), base_url="https://wiki.example.com")
        >>> cmd.run("DOC", "Release notes", content="<p>Hello</p>")
    """

    def __init__(
        self,
        api: APIWrapper,
        output: OutputHandler,
        base_url: str = "",
        resolver: Optional[PageResolver] = None,
    ):
        super().__init__(api, output, base_url)
        self.resolver = resolver or PageResolver(api)

    def run(
        self,
        space_key: Optional[str],
        title: Optional[str],
        content: Optional[str] = None,
        content_file: Optional[str] = None,
        parent: Optional[str] = None,
    ) -> ConfluencePage:
        if not space_key:
            raise InvalidArgumentError(
                "space required: use --space or set confluence.default_space in config"
            )
        title = (title or "").strip()
        if not title:
            raise InvalidArgumentError("--title is required and cannot be empty")

        body = read_content(content, content_file)
        if body is None:
            raise InvalidArgumentError("either --content or --content-file is required")

        parent_id = self.resolver.resolve(parent, space_key) if parent else None

        with self.output.spinner("Creating page..."):
            page = self.api.create_page(space_key, title, body, parent_id=parent_id)
        logger.info(f"Created page {page.page_id} in space {space_key}")

        self.output.print("Page created successfully")
        self.output.print(f"ID: {page.page_id}")
        self.output.print(f"Title: {page.title}")
        self.output.print(f"Space: {page.space_key or space_key}")
        self.output.print(f"URL: {self._page_url(page)}")
        return page


class EditCommand(_PageWriteCommand):
    """Handles the ``page edit`` command.

    Title and content each keep their current value when not given.
    """

    def run(
        self,
        page_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        content_file: Optional[str] = None,
    ) -> ConfluencePage:
        with self.output.spinner("Fetching page..."):
            current = self.api.get_page(page_id)

        new_title = (title or "").strip() or current.title
        body = read_content(content, content_file)
        if body is None:
            body = current.storage

        with self.output.spinner("Updating page..."):
            page = self.api.update_page(current.page_id, new_title, body)
        logger.info(f"Updated page {page.page_id} to version {page.version}")

        self.output.print("Page updated successfully")
        self.output.print(f"ID: {page.page_id}")
        self.output.print(f"Title: {page.title}")
        self.output.print(f"Version: {page.version}")
        self.output.print(f"URL: {self._page_url(page)}")
        return page


class DeleteCommand:
    """Handles the ``page delete`` command.

    Example:
        >>> DeleteCommand(api, OutputHandler()).run("123456", yes=True, cascade=True)
    """

    def __init__(self, api: APIWrapper, output: OutputHandler, resolver: Optional[PageResolver] = None):
        self.api = api
        self.output = output
        self.resolver = resolver or PageResolver(api)

    def run(
        self,
        ref: str,
        space_key: Optional[str] = None,
        yes: bool = False,
        cascade: bool = False,
    ) -> None:
        """Delete a page, and with ``cascade`` all of its descendants.

        Raises:
            InvalidArgumentError: If the page has children and ``cascade``
                is off, or the confirmation does not match the title
        """
        page_id = self.resolver.resolve(ref, space_key)
        with self.output.spinner("Fetching page..."):
            page = self.api.get_page(page_id)
            children = self.api.get_child_pages(page.page_id, limit=CHILDREN_FETCH_LIMIT)

        if children and not cascade:
            raise InvalidArgumentError(
                f'page "{page.title}" has {len(children)} child page(s) - '
                "use --cascade to delete recursively, or delete children first"
            )
        if children:
            self.output.warning(f"Will delete {len(children)} child page(s) recursively")

        if not yes and self.output.is_interactive():
            self.output.warning("Deleted pages cannot be recovered.")
            answer = self.output.prompt(f'Type "{page.title}" to confirm deletion: ')
            if answer.strip() != page.title:
                raise InvalidArgumentError("deletion cancelled")

        for child in children:
            self._delete_tree(child)

        self.api.delete_page(page.page_id)
        logger.info(f"Deleted page {page.page_id}")
        self.output.print(f'Deleted page "{page.title}" ({page.page_id})')

    def _delete_tree(self, page: ConfluencePage) -> None:
        # Leaves first
        for child in self.api.get_child_pages(page.page_id, limit=CHILDREN_FETCH_LIMIT):
            self._delete_tree(child)
        self.api.delete_page(page.page_id)
        logger.info(f"Deleted child page {page.page_id}")
        self.output.print(f'Deleted child page "{page.title}" ({page.page_id})')
