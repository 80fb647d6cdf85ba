"""Commands that list pages and spaces as tables."""

from typing import Optional

from src.confluence_client.api_wrapper import APIWrapper

from .errors import InvalidArgumentError
from .models import (
    DEFAULT_CHILDREN_LIMIT,
    DEFAULT_LIMIT,
    TITLE_TRUNCATE_LONG,
    TITLE_TRUNCATE_NORMAL,
    TITLE_TRUNCATE_SHORT,
    truncate,
)
from .output import OutputHandler
from .page_resolver import PageResolver


CONTENT_TYPES = ("page", "blogpost")


class ListCommand:
    """Handles the ``page list`` command."""

    def __init__(self, api: APIWrapper, output: OutputHandler):
        self.api = api
        self.output = output

    def run(self, space_key: Optional[str], limit: int = DEFAULT_LIMIT, content_type: str = "page") -> None:
        if not space_key:
            raise InvalidArgumentError(
                "space required: provide space key or set confluence.default_space in config"
            )
        if content_type not in CONTENT_TYPES:
            raise InvalidArgumentError(
                f"invalid type: {content_type}", hint="use one of: " + ", ".join(CONTENT_TYPES)
            )

        with self.output.spinner(f"Fetching {content_type} list..."):
            pages = self.api.get_content(space_key, content_type=content_type, limit=limit)

        if not pages:
            self.output.print(f"No {content_type} found in space {space_key}")
            return

        self.output.print_table(
            ["ID", "TITLE", "STATUS", "VERSION"],
            [
                [page.page_id, truncate(page.title, TITLE_TRUNCATE_NORMAL), page.status, f"v{page.version}"]
                for page in pages
            ],
        )


class ChildrenCommand:
    """Handles the ``page children`` command."""

    def __init__(self, api: APIWrapper, output: OutputHandler, resolver: Optional[PageResolver] = None):
        self.api = api
        self.output = output
        self.resolver = resolver or PageResolver(api)

    def run(self, ref: str, limit: int = DEFAULT_CHILDREN_LIMIT, space_key: Optional[str] = None) -> None:
        page_id = self.resolver.resolve(ref, space_key)
        with self.output.spinner("Fetching child pages..."):
            children = self.api.get_child_pages(page_id, limit=limit)

        if not children:
            self.output.print(f"No child pages found for page {page_id}")
            return

        self.output.print_table(
            ["ID", "TITLE", "STATUS", "VERSION"],
            [
                [page.page_id, truncate(page.title, TITLE_TRUNCATE_LONG), page.status, f"v{page.version}"]
                for page in children
            ],
        )


class SpacesCommand:
    """Handles the ``page spaces`` command."""

    def __init__(self, api: APIWrapper, output: OutputHandler):
        self.api = api
        self.output = output

    def run(self, limit: int = DEFAULT_LIMIT) -> None:
        with self.output.spinner("Fetching spaces..."):
            spaces = self.api.get_spaces(limit=limit)

        if not spaces:
            self.output.print("No spaces found")
            return

        self.output.print_table(
            ["KEY", "NAME", "TYPE", "STATUS"],
            [
                [space.key, truncate(space.name, TITLE_TRUNCATE_SHORT), space.type, space.status]
                for space in spaces
            ],
        )
