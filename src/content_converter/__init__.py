"""Content conversion module for view-format HTML → Markdown.

This module provides the MarkdownConverter built on markdownify.
"""

from .markdown_converter import MarkdownConverter, html_to_markdown

__all__ = ['MarkdownConverter', 'html_to_markdown']
