"""ViewCommand: show or save a Confluence page.

Fetches a page and renders it as Markdown (default), storage XHTML or view
HTML. Markdown output can be prefixed with a table of contents, and when
saved to a file its images can be downloaded next to it with references
rewritten to the local copies.
"""

import logging
from pathlib import Path
from typing import Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.content_converter import MarkdownConverter
from src.models import ConfluencePage
from src.page_export import (
    OutputFormat,
    PageExportError,
    add_toc,
    format_content,
    rehome_images,
)

from .errors import InvalidArgumentError
from .output import OutputHandler
from .page_resolver import PageResolver

logger = logging.getLogger(__name__)


class ViewCommand:
    """Handles the ``page view`` command.

    Example:
        >>> cmd = ViewCommand(api, OutputHandler(), base_url="https://wiki.example.com")
        >>> cmd.run("123456", output_file="page.md", with_images=True)
    """

    def __init__(
        self,
        api: APIWrapper,
        output: OutputHandler,
        base_url: str = "",
        converter: Optional[MarkdownConverter] = None,
        resolver: Optional[PageResolver] = None,
    ):
        self.api = api
        self.output = output
        self.base_url = (base_url or "").rstrip('/')
        self.converter = converter or MarkdownConverter()
        self.resolver = resolver or PageResolver(api)

    def run(
        self,
        ref: str,
        output_file: Optional[str] = None,
        output_format: str = OutputFormat.MARKDOWN.value,
        with_toc: bool = False,
        with_images: bool = False,
        info: bool = False,
        space_key: Optional[str] = None,
    ) -> None:
        """Fetch the page and print or save it.

        Raises:
            InvalidArgumentError: If the options are inconsistent
            UnsupportedFormatError: If the format is unknown
            ConversionError: If Markdown conversion fails
            PageExportError: If images or the output file cannot be written
            ConfluenceError: If the page cannot be fetched
        """
        fmt = OutputFormat.parse(output_format)
        if with_images and not output_file:
            raise InvalidArgumentError("--with-images requires -o to specify output file")
        if with_images and fmt is not OutputFormat.MARKDOWN:
            raise InvalidArgumentError(
                f"--with-images only works with markdown format (current: {output_format})"
            )

        page_id = self.resolver.resolve(ref, space_key)
        with self.output.spinner(f"Fetching page {page_id}..."):
            page = self.api.get_page(page_id)
        self.output.info(f"Fetched page {page.page_id} (version {page.version})")

        if info:
            self._print_info(page)
            return

        content = format_content(page, fmt, self.converter)

        if with_toc and fmt is OutputFormat.MARKDOWN:
            content = add_toc(page.structural_markup, content)

        if with_images:
            content = self._download_images(page, content, output_file)

        if output_file:
            self._save(output_file, content)
            self.output.print(f"Saved to {output_file}")
        else:
            self.output.print(content)

    def _print_info(self, page: ConfluencePage) -> None:
        self.output.print(f"Page: {page.title}")
        self.output.print(f"Space: {page.space_key}")
        self.output.print(f"Status: {page.status}")
        self.output.print(f"Version: {page.version}")
        self.output.print(f"URL: {self.base_url}{page.webui_link}")

    def _download_images(self, page: ConfluencePage, content: str, output_file: str) -> str:
        result = rehome_images(
            page.page_id,
            page.structural_markup,
            content,
            output_file,
            self.api.get_attachment,
        )
        for filename in result.downloaded:
            self.output.print(f"Downloaded: {Path(result.image_dir) / filename}")
        if result.failed:
            self.output.warning(
                f"{len(result.failed)} image(s) could not be downloaded; "
                f"their references were left unchanged"
            )
        return result.markdown

    def _save(self, output_file: str, content: str) -> None:
        try:
            Path(output_file).write_text(content, encoding='utf-8')
        except OSError as e:
            raise PageExportError(f"failed to write output file: {e}") from e
