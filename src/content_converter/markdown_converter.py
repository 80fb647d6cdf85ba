"""HTML to Markdown conversion for Confluence view-format pages.

Uses markdownify for the transformation itself; this module only fixes the
output style, keeps the few Confluence view-format quirks out of the
result, and trims the result.
"""

from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..confluence_client.errors import ConversionError


class _ConfluenceMarkdownConverter(BaseMarkdownConverter):
    """Custom markdownify converter with Confluence-friendly settings."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')  # Use # style headings
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        super().__init__(**options)

    def convert_img(self, el, text, parent_tags):
        """Convert images, preferring the original attachment URL.

        Confluence view format renders attachments as thumbnails; the
        ``data-image-src`` attribute keeps the full-size download link.
        """
        original = el.attrs.get('data-image-src')
        if original:
            el.attrs['src'] = original
        return super().convert_img(el, text, parent_tags)


class MarkdownConverter:
    """Converts view-format HTML to trimmed Markdown.

    Example:
        >>> MarkdownConverter().html_to_markdown("<h1>Title</h1>")
        '# Title'
    """

    def __init__(self, **options):
        """Initialize the converter.

        Args:
            **options: markdownify options overriding the defaults
        """
        self._options = options

    def html_to_markdown(self, html: str) -> str:
        """Convert HTML to Markdown with surrounding whitespace removed.

        Args:
            html: View-format HTML

        Returns:
            Markdown text (empty string for empty input)

        Raises:
            ConversionError: If the HTML cannot be converted
        """
        if not html:
            return ""

        try:
            markdown = _ConfluenceMarkdownConverter(**self._options).convert(html)
        except Exception as e:
            raise ConversionError(f"Markdownify conversion failed: {e}") from e
        return markdown.strip()


def html_to_markdown(html: str) -> str:
    """Convert HTML to Markdown using the default converter settings."""
    return MarkdownConverter().html_to_markdown(html)
