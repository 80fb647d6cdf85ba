"""Unit tests for page_export.content_formatter and OutputFormat."""

import pytest
from unittest.mock import Mock

from src.confluence_client.errors import ConversionError
from src.models import ConfluencePage
from src.page_export import OutputFormat, UnsupportedFormatError, format_content


def make_page(storage="<p>storage</p>", view="<p>view</p>"):
    return ConfluencePage(page_id="1", title="T", storage=storage, view=view)


class TestOutputFormatParse:
    """Test cases for OutputFormat.parse."""

    @pytest.mark.parametrize("value,expected", [
        ("markdown", OutputFormat.MARKDOWN),
        ("md", OutputFormat.MARKDOWN),
        ("MD", OutputFormat.MARKDOWN),
        ("storage", OutputFormat.STORAGE),
        ("html", OutputFormat.HTML),
        ("HTML", OutputFormat.HTML),
    ])
    def test_accepted_values(self, value, expected):
        """Known names and the md alias parse case-insensitively."""
        assert OutputFormat.parse(value) is expected

    def test_unknown_value_raises(self):
        """Unknown formats raise UnsupportedFormatError listing the choices."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            OutputFormat.parse("pdf")

        assert str(exc_info.value) == "unsupported format: pdf (supported: html, markdown, md, storage)"
        assert exc_info.value.output_format == "pdf"


class TestFormatContent:
    """Test cases for format_content."""

    def test_html_returns_view_body(self):
        """HTML output is the view body verbatim."""
        assert format_content(make_page(), OutputFormat.HTML) == "<p>view</p>"

    def test_storage_returns_storage_body(self):
        """Storage output is the storage body verbatim."""
        assert format_content(make_page(), OutputFormat.STORAGE) == "<p>storage</p>"

    def test_storage_falls_back_to_view(self):
        """Storage output uses the view body when storage is empty."""
        page = make_page(storage="")

        assert format_content(page, OutputFormat.STORAGE) == "<p>view</p>"

    def test_markdown_converts_view_body(self):
        """Markdown output is converted from the view body."""
        converter = Mock()
        converter.html_to_markdown.return_value = "view"

        result = format_content(make_page(), OutputFormat.MARKDOWN, converter)

        assert result == "view"
        converter.html_to_markdown.assert_called_once_with("<p>view</p>")

    def test_markdown_with_default_converter(self):
        """A default converter is used when none is given."""
        assert format_content(make_page(), OutputFormat.MARKDOWN) == "view"

    def test_markdown_conversion_error_is_wrapped(self):
        """Conversion failures name the markdown step."""
        converter = Mock()
        converter.html_to_markdown.side_effect = ConversionError("bad html")

        with pytest.raises(ConversionError) as exc_info:
            format_content(make_page(), OutputFormat.MARKDOWN, converter)

        assert str(exc_info.value) == "failed to convert to markdown: bad html"
