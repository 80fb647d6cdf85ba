"""Render a page body in the requested output format."""

from typing import Optional

from src.confluence_client.errors import ConversionError
from src.content_converter import MarkdownConverter
from src.models import ConfluencePage

from .models import OutputFormat


def format_content(
    page: ConfluencePage,
    output_format: OutputFormat,
    converter: Optional[MarkdownConverter] = None,
) -> str:
    """Return the page body as Markdown, storage XHTML or view HTML.

    Storage output falls back to the view body when the storage body is
    empty. Markdown is converted from the view body.

    Raises:
        ConversionError: If the view body cannot be converted to Markdown
    """
    if output_format is OutputFormat.HTML:
        return page.view
    if output_format is OutputFormat.STORAGE:
        return page.storage or page.view

    converter = converter or MarkdownConverter()
    try:
        return converter.html_to_markdown(page.view)
    except ConversionError as e:
        raise ConversionError(f"failed to convert to markdown: {e}") from e
